"""The statement shapes issued by the rules engine during bootstrap and metadata reads."""

from __future__ import annotations

from uuid import UUID

from offline_db.core.dispatcher import Shape
from offline_db.integrations.package_context import PackageContext
from offline_db.shapes import culture, localization, schemas, security, settings


def default_shapes(
    context: PackageContext,
    *,
    process_default_schema_uid: UUID | None = None,
) -> list[Shape]:
    """Return every supported shape in dispatch order."""

    return [
        Shape(
            "SysCulture",
            culture.SysCultureRequest,
            culture.SysCultureParser(),
            culture.SysCultureHandler(),
        ),
        Shape(
            "SysSettingsByCode",
            settings.SysSettingsByCodeRequest,
            settings.SysSettingsByCodeParser(),
            settings.SysSettingsByCodeHandler(),
        ),
        Shape(
            "SysSettingsWithValueByCode",
            settings.SysSettingsWithValueByCodeRequest,
            settings.SysSettingsWithValueByCodeParser(),
            settings.SysSettingsWithValueByCodeHandler(),
        ),
        Shape(
            "SysAdminUnitInRoleByUserId",
            security.SysAdminUnitInRoleByUserIdRequest,
            security.SysAdminUnitInRoleByUserIdParser(),
            security.SysAdminUnitInRoleByUserIdHandler(),
        ),
        Shape(
            "VwSysSchemaInWorkspaceByUId",
            schemas.VwSysSchemaInWorkspaceByUIdRequest,
            schemas.VwSysSchemaInWorkspaceByUIdParser(),
            schemas.VwSysSchemaInWorkspaceByUIdHandler(
                context=context,
                process_default_schema_uid=process_default_schema_uid,
            ),
        ),
        Shape(
            "PackageUIdBySchemaId",
            schemas.PackageUIdBySchemaIdRequest,
            schemas.PackageUIdBySchemaIdParser(),
            schemas.PackageUIdBySchemaIdHandler(context=context),
        ),
        Shape(
            "SysSchemaParentsInPackageHierarchy",
            schemas.SysSchemaParentsInPackageHierarchyRequest,
            schemas.SysSchemaParentsInPackageHierarchyParser(),
            schemas.SysSchemaParentsInPackageHierarchyHandler(context=context),
        ),
        Shape(
            "HierarchicalSelect",
            schemas.HierarchicalSelectRequest,
            schemas.HierarchicalSelectParser(),
            schemas.HierarchicalSelectHandler(),
        ),
        Shape(
            "SysSchemaUserPropertyBySchemaUId",
            schemas.SysSchemaUserPropertyBySchemaUIdRequest,
            schemas.SysSchemaUserPropertyBySchemaUIdParser(),
            schemas.SysSchemaUserPropertyBySchemaUIdHandler(),
        ),
        Shape(
            "LocalizableValuesBySchemaUId",
            localization.LocalizableValuesBySchemaUIdRequest,
            localization.LocalizableValuesBySchemaUIdParser(),
            localization.LocalizableValuesBySchemaUIdHandler(),
        ),
        Shape(
            "UpdateSysSchemaLastError",
            schemas.UpdateSysSchemaLastErrorRequest,
            schemas.UpdateSysSchemaLastErrorParser(),
            schemas.UpdateSysSchemaLastErrorHandler(),
        ),
    ]
