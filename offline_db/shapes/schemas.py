"""Schema metadata statements answered from the loaded package.

Schemas of the package are addressed by their UId; offline there is no
separate database Id, so a schema's Id and UId are the same value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from offline_db.core.errors import SchemaNotFoundInContext
from offline_db.integrations.package_context import PackageContext, find_schema, get_schema
from offline_db.integrations.result_set import Column, ResultSet
from offline_db.shapes.base import (
    ExactTextParser,
    FragmentTextParser,
    Request,
    StatementCommand,
    defaults_expected,
    str_parameter,
    uuid_parameter,
)

LOGGER = logging.getLogger(__name__)

PROCESS_SCHEMA_MANAGER = "ProcessSchemaManager"
NIL_UUID = UUID(int=0)


@dataclass(frozen=True, slots=True)
class VwSysSchemaInWorkspaceByUIdRequest(Request):
    schema_uid: UUID
    manager_name: str


class VwSysSchemaInWorkspaceByUIdParser(ExactTextParser[VwSysSchemaInWorkspaceByUIdRequest]):
    reference_text = """
        SELECT
            "Id",
            "UId",
            "Name",
            "ManagerName",
            "MetaData"
        FROM
            "public"."VwSysSchemaInWorkspace"
        WHERE
            "UId" = @SchemaUId
            AND "ManagerName" = @P1
            AND "VwSysSchemaInWorkspace"."SysWorkspaceId" = @P2
    """

    def parse(self, command: StatementCommand) -> VwSysSchemaInWorkspaceByUIdRequest:
        return VwSysSchemaInWorkspaceByUIdRequest(
            schema_uid=uuid_parameter(command, "SchemaUId"),
            manager_name=str_parameter(command, "P1"),
        )


@dataclass(slots=True)
class VwSysSchemaInWorkspaceByUIdHandler:
    """Returns the schema row with its metadata.

    The process schema manager asks for its base schema, which never lives in
    a customer package; that lookup is answered with no rows.
    """

    context: PackageContext
    process_default_schema_uid: UUID | None = None

    def handle(self, request: VwSysSchemaInWorkspaceByUIdRequest) -> ResultSet:
        schema = find_schema(self.context, request.schema_uid)
        if schema is None:
            if self._is_process_base_schema(request):
                return defaults_expected(
                    LOGGER,
                    "Base process schema %s requested, returning no rows",
                    request.schema_uid,
                )
            raise SchemaNotFoundInContext(request.schema_uid)

        descriptor = schema.descriptor
        return ResultSet.single_row(
            [
                Column("Id", UUID),
                Column("UId", UUID),
                Column("Name", str),
                Column("ManagerName", str),
                Column("MetaData", bytes),
            ],
            [descriptor.uid, descriptor.uid, descriptor.name, descriptor.manager_name, schema.get_metadata()],
        )

    def _is_process_base_schema(self, request: VwSysSchemaInWorkspaceByUIdRequest) -> bool:
        return (
            request.manager_name == PROCESS_SCHEMA_MANAGER
            and self.process_default_schema_uid is not None
            and request.schema_uid == self.process_default_schema_uid
        )


@dataclass(frozen=True, slots=True)
class PackageUIdBySchemaIdRequest(Request):
    schema_id: UUID


class PackageUIdBySchemaIdParser(ExactTextParser[PackageUIdBySchemaIdRequest]):
    reference_text = """
        SELECT
            "PackageUId"
        FROM
            "public"."VwSysSchemaInWorkspace"
        WHERE
            "SysWorkspaceId" = @P1
            AND "Id" = @P2
    """

    def parse(self, command: StatementCommand) -> PackageUIdBySchemaIdRequest:
        return PackageUIdBySchemaIdRequest(schema_id=uuid_parameter(command, "P2"))


@dataclass(slots=True)
class PackageUIdBySchemaIdHandler:
    context: PackageContext

    def handle(self, request: PackageUIdBySchemaIdRequest) -> ResultSet:
        get_schema(self.context, request.schema_id)
        return ResultSet.single_row([Column("PackageUId", UUID)], [self.context.descriptor.uid])


@dataclass(frozen=True, slots=True)
class SysSchemaParentsInPackageHierarchyRequest(Request):
    start_schema_uid: UUID


class SysSchemaParentsInPackageHierarchyParser(ExactTextParser[SysSchemaParentsInPackageHierarchyRequest]):
    reference_text = """
        SELECT *
        FROM public."tsp_GetSysSchemaParentsInPackageHierarchyByPackage"(
            @StartSchemaUId,
            @WorkspaceId)
    """

    def parse(self, command: StatementCommand) -> SysSchemaParentsInPackageHierarchyRequest:
        return SysSchemaParentsInPackageHierarchyRequest(
            start_schema_uid=uuid_parameter(command, "StartSchemaUId")
        )


@dataclass(slots=True)
class SysSchemaParentsInPackageHierarchyHandler:
    """Returns the starting schema only, as the root of its own hierarchy."""

    context: PackageContext

    def handle(self, request: SysSchemaParentsInPackageHierarchyRequest) -> ResultSet:
        LOGGER.debug(
            "Returning only schema %s instead of its full package hierarchy",
            request.start_schema_uid,
        )
        schema = get_schema(self.context, request.start_schema_uid)
        descriptor = schema.descriptor
        return ResultSet.single_row(
            [
                Column("Id", UUID),
                Column("UId", UUID),
                Column("Name", str),
                Column("MetaData", bytes),
                Column("ParentId", UUID),
                Column("ModifiedOn", datetime),
                Column("PackageLevel", int),
                Column("SchemaLevel", int),
            ],
            [
                descriptor.uid,
                descriptor.uid,
                descriptor.name,
                schema.get_metadata(),
                NIL_UUID,
                datetime.min,
                0,
                0,
            ],
        )


@dataclass(frozen=True, slots=True)
class HierarchicalSelectRequest(Request):
    schema_uid: UUID


class HierarchicalSelectParser(ExactTextParser[HierarchicalSelectRequest]):
    reference_text = """
        SELECT
            "Id",
            "Name",
            "ParentId"
        FROM
            "$HierarchicalSelect"
    """

    def parse(self, command: StatementCommand) -> HierarchicalSelectRequest:
        return HierarchicalSelectRequest(schema_uid=uuid_parameter(command, "SchemaUId"))


class HierarchicalSelectHandler:
    def handle(self, request: HierarchicalSelectRequest) -> ResultSet:
        return defaults_expected(
            LOGGER,
            "Hierarchical select for schema %s returns no rows",
            request.schema_uid,
        )


@dataclass(frozen=True, slots=True)
class SysSchemaUserPropertyBySchemaUIdRequest(Request):
    schema_uid: UUID
    manager_name: str


class SysSchemaUserPropertyBySchemaUIdParser(FragmentTextParser[SysSchemaUserPropertyBySchemaUIdRequest]):
    prefix = """
        SELECT
            "SysSchemaUserProperty"."Name" "Name",
            "SysSchemaUserProperty"."Value" "Value"
    """
    fragments = (
        """
        FROM
            "public"."SysSchemaUserProperty" "SysSchemaUserProperty"
        """,
        """
        SELECT
            "SysSchema"."Id" "Id"
        FROM
            "public"."SysSchema" "SysSchema"
            LEFT OUTER JOIN "public"."SysPackage" "SysPackage" ON ("SysPackage"."Id" = "SysSchema"."SysPackageId")
        WHERE
            "SysSchemaUserProperty"."SysSchemaId" = "SysSchema"."Id"
            AND ("SysSchema"."ManagerName" = @P1
            AND "SysPackage"."SysWorkspaceId" = @P2
            AND "SysSchema"."UId" = @P3)
        """,
    )

    def parse(self, command: StatementCommand) -> SysSchemaUserPropertyBySchemaUIdRequest:
        return SysSchemaUserPropertyBySchemaUIdRequest(
            schema_uid=uuid_parameter(command, "P3"),
            manager_name=str_parameter(command, "P1"),
        )


class SysSchemaUserPropertyBySchemaUIdHandler:
    def handle(self, request: SysSchemaUserPropertyBySchemaUIdRequest) -> ResultSet:
        return defaults_expected(
            LOGGER,
            "No user properties returned for schema %s of manager %s",
            request.schema_uid,
            request.manager_name,
        )


@dataclass(frozen=True, slots=True)
class UpdateSysSchemaLastErrorRequest(Request):
    schema_id: UUID
    last_error: str


class UpdateSysSchemaLastErrorParser(ExactTextParser[UpdateSysSchemaLastErrorRequest]):
    reference_text = """
        UPDATE "public"."SysSchema"
        SET
            "LastError" = @P2
        WHERE
            "Id" = @P1
    """

    def parse(self, command: StatementCommand) -> UpdateSysSchemaLastErrorRequest:
        return UpdateSysSchemaLastErrorRequest(
            schema_id=uuid_parameter(command, "P1"),
            last_error=str_parameter(command, "P2"),
        )


class UpdateSysSchemaLastErrorHandler:
    """Surfaces the compilation error the engine tried to store."""

    def handle(self, request: UpdateSysSchemaLastErrorRequest) -> ResultSet:
        LOGGER.error("Schema '%s' error occurred: %s", request.schema_id, request.last_error)
        return ResultSet.single_row([Column("RowsAffected", int)], [1])
