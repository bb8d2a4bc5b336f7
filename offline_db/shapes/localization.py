"""Localized resource values stored per schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from offline_db.integrations.result_set import ResultSet
from offline_db.shapes.base import (
    ExactTextParser,
    Request,
    StatementCommand,
    defaults_expected,
    uuid_parameter,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocalizableValuesBySchemaUIdRequest(Request):
    schema_uid: UUID


class LocalizableValuesBySchemaUIdParser(ExactTextParser[LocalizableValuesBySchemaUIdRequest]):
    reference_text = """
        SELECT
            "LocalizableValue"."SysSchemaId" "SchemaId",
            "SysSchema"."UId" "SchemaUId",
            "SysSchema"."Name" "SchemaName",
            "SysPackage"."Name" "PackageName",
            "LocalizableValue"."SysPackageId" "PackageId",
            "LocalizableValue"."SysCultureId" "CultureId",
            "LocalizableValue"."ModifiedOn" "ModifiedOn",
            "LocalizableValue"."Key" "Key",
            "LocalizableValue"."Value" "Value",
            "LocalizableValue"."ResourceType" "ResourceType",
            "LocalizableValue"."ImageData" "ImageData"
        FROM
            "public"."SysLocalizableValue" "LocalizableValue"
            INNER JOIN "public"."SysPackage" ON ("SysPackage"."Id" = "LocalizableValue"."SysPackageId")
            INNER JOIN "public"."SysSchema" ON ("SysSchema"."Id" = "LocalizableValue"."SysSchemaId")
        WHERE
            "SysPackage"."SysWorkspaceId" = @P1
            AND "LocalizableValue"."SysPackageId" IN (
        SELECT
            "SysPackageId"
        FROM
            "public"."SysSchema"
        WHERE
            "Id" IN (@P2))
            AND "LocalizableValue"."SysSchemaId" = @P3
    """

    def parse(self, command: StatementCommand) -> LocalizableValuesBySchemaUIdRequest:
        return LocalizableValuesBySchemaUIdRequest(schema_uid=uuid_parameter(command, "P3"))


class LocalizableValuesBySchemaUIdHandler:
    def handle(self, request: LocalizableValuesBySchemaUIdRequest) -> ResultSet:
        return defaults_expected(
            LOGGER,
            "No localizable values returned for schema %s, resources are read from the package",
            request.schema_uid,
        )
