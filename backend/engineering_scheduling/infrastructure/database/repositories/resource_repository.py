"""Repository for engineering resources."""

from sqlmodel import col, select

from ....domain.scheduling.entities import EngineeringResource
from ....domain.scheduling.value_objects.enums import ResourceType
from ..mappers import ResourceMapper
from ..models import EngineeringResourceTable
from .base import BaseRepository


class ResourceRepository(BaseRepository[EngineeringResourceTable, EngineeringResource]):
    model = EngineeringResourceTable
    to_domain = staticmethod(ResourceMapper.sql_to_domain)
    to_row = staticmethod(ResourceMapper.domain_to_sql)

    def get_by_code(self, resource_code: str) -> EngineeringResource | None:
        found = self._list(
            select(EngineeringResourceTable).where(
                EngineeringResourceTable.resource_code == resource_code
            )
        )
        return found[0] if found else None

    def list_resources(
        self,
        resource_type: ResourceType | None = None,
        active_only: bool = False,
    ) -> list[EngineeringResource]:
        statement = select(EngineeringResourceTable)
        if resource_type is not None:
            statement = statement.where(
                EngineeringResourceTable.resource_type == resource_type
            )
        if active_only:
            statement = statement.where(EngineeringResourceTable.is_active == True)  # noqa: E712
        return self._list(statement.order_by(EngineeringResourceTable.resource_code))

    def codes_with_prefix(self, pattern: str) -> list[str]:
        """Resource codes starting with ``pattern`` (e.g. ``PER-2025-``)."""
        statement = select(EngineeringResourceTable.resource_code).where(
            col(EngineeringResourceTable.resource_code).startswith(pattern)
        )
        return list(self.session.exec(statement).all())
