"""Culture list read while the rules engine bootstraps."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from offline_db.integrations.result_set import Column, ResultSet
from offline_db.shapes.base import ExactTextParser, Request, StatementCommand

DEFAULT_CULTURE_ID = UUID("a5420246-0a8e-e111-84a3-00155d054c03")
DEFAULT_CULTURE_NAME = "en-US"


@dataclass(frozen=True, slots=True)
class SysCultureRequest(Request):
    pass


class SysCultureParser(ExactTextParser[SysCultureRequest]):
    reference_text = """
        SELECT
            "Id",
            "Name",
            "Active"
        FROM
            "public"."SysCulture"
    """

    def parse(self, command: StatementCommand) -> SysCultureRequest:
        return SysCultureRequest()


class SysCultureHandler:
    """Only the default culture exists offline."""

    def handle(self, request: SysCultureRequest) -> ResultSet:
        return ResultSet.single_row(
            [Column("Id", UUID), Column("Name", str), Column("Active", bool)],
            [DEFAULT_CULTURE_ID, DEFAULT_CULTURE_NAME, True],
        )
