from __future__ import annotations

from app.application.ports.service_catalog import ServiceCatalogPort
from app.domain.entities.service_catalog import ServiceOption, ServicePackage
from app.infrastructure.knowledge.service_catalog_data import SERVICE_OPTIONS, SERVICE_PACKAGES


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(
        self,
        options: dict[str, ServiceOption] | None = None,
        packages: dict[str, ServicePackage] | None = None,
    ) -> None:
        self._options = options if options is not None else SERVICE_OPTIONS
        self._packages = packages if packages is not None else SERVICE_PACKAGES

    def get_option(self, option_id: str) -> ServiceOption | None:
        return self._options.get(option_id.lower().strip())

    def get_package(self, package_id: str) -> ServicePackage | None:
        return self._packages.get(package_id.lower().strip())

    def get_add_ons_for(self, category: str) -> list[ServiceOption]:
        return [
            option
            for option in self._options.values()
            if option.is_add_on and category in option.add_on_for
        ]
