"""Role membership of the bootstrap user."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from uuid import UUID

from offline_db.integrations.result_set import Column, ResultSet
from offline_db.shapes.base import (
    ExactTextParser,
    Request,
    StatementCommand,
    int_parameter,
    uuid_parameter,
)

LOGGER = logging.getLogger(__name__)

SUPERVISOR_USER_ID = UUID("7f3b869f-34f3-4f20-ab4d-7480a5fdf647")

# All employees, system administrators
SUPERVISOR_ROLE_IDS: tuple[UUID, ...] = (
    UUID("83a43ebc-f36b-1410-298d-001e8c82bcad"),
    UUID("a29a3ba5-4b0d-de11-9a51-005056c00008"),
)


class SysAdminUnitType(IntEnum):
    ORGANISATION = 0
    DEPARTMENT = 1
    MANAGER = 2
    TEAM = 3
    USER = 4
    SELF_SERVICE_PORTAL_USER = 5
    FUNCTIONAL_ROLE = 6


EXPECTED_EXCLUDED_TYPES = (SysAdminUnitType.USER, SysAdminUnitType.SELF_SERVICE_PORTAL_USER)


@dataclass(frozen=True, slots=True)
class SysAdminUnitInRoleByUserIdRequest(Request):
    user_id: UUID
    exclude_role_types: tuple[SysAdminUnitType, ...]


class SysAdminUnitInRoleByUserIdParser(ExactTextParser[SysAdminUnitInRoleByUserIdRequest]):
    reference_text = """
        SELECT
            "User"."Id" "UserId",
            "User"."ConnectionType" "ConnectionType",
            "SysAdminUnitInRole"."SysAdminUnitRoleId" "RoleId"
        FROM
            "public"."SysAdminUnitInRole"
            INNER JOIN "public"."SysAdminUnit" "User" ON ("SysAdminUnitInRole"."SysAdminUnitId" = "User"."Id")
            INNER JOIN "public"."SysAdminUnit" "Role" ON ("SysAdminUnitInRole"."SysAdminUnitRoleId" = "Role"."Id")
        WHERE
            "SysAdminUnitInRole"."SysAdminUnitId" = @P1
            AND "Role"."SysAdminUnitTypeValue" <> @P2
            AND "Role"."SysAdminUnitTypeValue" <> @P3
    """

    def parse(self, command: StatementCommand) -> SysAdminUnitInRoleByUserIdRequest:
        return SysAdminUnitInRoleByUserIdRequest(
            user_id=uuid_parameter(command, "P1"),
            exclude_role_types=(
                SysAdminUnitType(int_parameter(command, "P2")),
                SysAdminUnitType(int_parameter(command, "P3")),
            ),
        )


class SysAdminUnitInRoleByUserIdHandler:
    """Answers with the Supervisor's roles whoever is asked for."""

    def handle(self, request: SysAdminUnitInRoleByUserIdRequest) -> ResultSet:
        if request.user_id != SUPERVISOR_USER_ID or request.exclude_role_types != EXPECTED_EXCLUDED_TYPES:
            LOGGER.warning(
                "Role memberships requested for user %s excluding %s; answering with Supervisor roles",
                request.user_id,
                [item.name for item in request.exclude_role_types],
            )

        return ResultSet(
            [Column("UserId", UUID), Column("ConnectionType", int), Column("RoleId", UUID)],
            [(SUPERVISOR_USER_ID, 0, role_id) for role_id in SUPERVISOR_ROLE_IDS],
        )
