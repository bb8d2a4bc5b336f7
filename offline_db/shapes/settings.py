"""System settings lookups.

Setting values depend on what was installed on a real instance, so both
lookups answer with no rows and the rules engine uses each setting's default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from offline_db.integrations.result_set import ResultSet
from offline_db.shapes.base import (
    ExactTextParser,
    Request,
    StatementCommand,
    defaults_expected,
    str_parameter,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SysSettingsByCodeRequest(Request):
    code: str


class SysSettingsByCodeParser(ExactTextParser[SysSettingsByCodeRequest]):
    reference_text = """
        SELECT
            "Id",
            "Name",
            "Code",
            "Description",
            "ValueTypeName",
            "IsPersonal",
            "IsCacheable",
            "IsSSPAvailable",
            "ReferenceSchemaUId"
        FROM
            "public"."SysSettings"
        WHERE
            "Code" = @P1
    """

    def parse(self, command: StatementCommand) -> SysSettingsByCodeRequest:
        return SysSettingsByCodeRequest(code=str_parameter(command, "P1"))


class SysSettingsByCodeHandler:
    def handle(self, request: SysSettingsByCodeRequest) -> ResultSet:
        return defaults_expected(
            LOGGER,
            "No SysSettings returned for code %s, the default value is expected to be used",
            request.code,
        )


@dataclass(frozen=True, slots=True)
class SysSettingsWithValueByCodeRequest(Request):
    code: str


class SysSettingsWithValueByCodeParser(ExactTextParser[SysSettingsWithValueByCodeRequest]):
    reference_text = """
        SELECT
            "Code",
            "ValueTypeName",
            "IsCacheable",
            "Position",
            "SysAdminUnitId",
            "TextValue",
            "IntegerValue",
            "FloatValue",
            "BooleanValue",
            "DateTimeValue",
            "GuidValue",
            "BinaryValue"
        FROM
            "public"."SysSettings"
            LEFT OUTER JOIN "public"."SysSettingsValue" ON ("SysSettings"."Id" = "SysSettingsValue"."SysSettingsId")
        WHERE
            "SysSettings"."Code" = @P1
        ORDER BY
            "Position" ASC
    """

    def parse(self, command: StatementCommand) -> SysSettingsWithValueByCodeRequest:
        return SysSettingsWithValueByCodeRequest(code=str_parameter(command, "P1"))


class SysSettingsWithValueByCodeHandler:
    def handle(self, request: SysSettingsWithValueByCodeRequest) -> ResultSet:
        return defaults_expected(
            LOGGER,
            "No SysSettings or SysSettingsValue returned for code %s, the default value is expected to be used",
            request.code,
        )
