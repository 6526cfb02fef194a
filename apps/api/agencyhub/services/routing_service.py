"""Landing redirect decisions (role + query parameters -> destination path)."""

from urllib.parse import quote

from agencyhub.db.enums import AGENCY_ROLES, SUBACCOUNT_ROLES, Role


# OAuth-style `state` values carry "<path>___<agencyId>"
STATE_SEPARATOR = "___"


def resolve_landing_path(
    role: Role | str | None,
    agency_id: str,
    plan: str | None = None,
    state: str | None = None,
    code: str | None = None,
) -> str | None:
    """
    Pick where a signed-in user lands.

    Returns None when the user is not authorized to land anywhere
    (unknown role, or a malformed state parameter).
    """
    if role is None or not Role.has_value(role):
        return None
    role = Role(role)

    if role in SUBACCOUNT_ROLES:
        return "/subaccount"

    if role in AGENCY_ROLES:
        if plan:
            return f"/agency/{agency_id}/billing?plan={quote(plan, safe='')}"

        if state:
            parts = state.split(STATE_SEPARATOR)
            state_path = parts[0]
            state_agency_id = parts[1] if len(parts) > 1 else ""
            if not state_agency_id:
                return None
            path = f"/agency/{quote(state_agency_id, safe='')}/{quote(state_path, safe='/')}"
            if code is None:
                return path
            return f"{path}?code={quote(code, safe='')}"

        return f"/agency/{agency_id}"

    return None
