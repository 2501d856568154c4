from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_catalog import ServiceOption, ServicePackage


class ServiceCatalogPort(ABC):
    @abstractmethod
    def get_option(self, option_id: str) -> ServiceOption | None:
        """Get a service option (including add-ons) by ID."""
        raise NotImplementedError

    @abstractmethod
    def get_package(self, package_id: str) -> ServicePackage | None:
        """Get a service package by ID."""
        raise NotImplementedError

    @abstractmethod
    def get_add_ons_for(self, category: str) -> list[ServiceOption]:
        """List add-ons that may be attached to a service in `category`."""
        raise NotImplementedError
