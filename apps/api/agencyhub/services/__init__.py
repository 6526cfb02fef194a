"""Service layer modules."""

from agencyhub.services.agency_service import (
    AGENCY_SIDEBAR_OPTIONS,
    delete_agency,
    update_agency_details,
    upsert_agency,
)
from agencyhub.services.identity_service import (
    AuthenticationRequired,
    ClerkIdentityProvider,
    IdentityProvider,
    Principal,
)
from agencyhub.services.invitation_service import (
    send_invitation,
    verify_and_accept_invitation,
)
from agencyhub.services.notification_service import (
    get_notification_and_user,
    save_activity_logs_notification,
)
from agencyhub.services.routing_service import resolve_landing_path
from agencyhub.services.subaccount_service import (
    SUBACCOUNT_SIDEBAR_OPTIONS,
    delete_subaccount,
    get_subaccount_details,
    upsert_subaccount,
)
from agencyhub.services.user_service import (
    create_team_user,
    get_auth_user_details,
    get_user_by_email,
    init_user,
)
