"""CLI tools for Agency Hub administration."""

import click

from agencyhub.db.enums import DEFAULT_ROLE, Role
from agencyhub.db.models import Agency, Invitation
from agencyhub.db.session import SessionLocal
from agencyhub.services import notification_service


@click.group()
def cli():
    """Agency Hub CLI tools."""
    pass


@cli.command()
@click.option("--agency-id", required=True, help="Agency ID")
@click.option("--email", required=True, help="Invitee email address")
@click.option(
    "--role",
    default=DEFAULT_ROLE.value,
    type=click.Choice([r.value for r in Role if r != Role.AGENCY_OWNER]),
    help="Role granted on acceptance",
)
def send_invite(agency_id: str, email: str, role: str):
    """
    Create a pending invitation row without emailing the invitee.

    The invitee is attached to the agency the next time they sign in.

    Example:
        python -m agencyhub.cli send-invite --agency-id <id> --email user@example.com
    """
    db = SessionLocal()
    try:
        agency = db.query(Agency).filter(Agency.id == agency_id).first()
        if not agency:
            click.echo(f"❌ Agency not found: {agency_id}")
            return

        existing = db.query(Invitation).filter(Invitation.email == email).first()
        if existing:
            click.echo(f"❌ Invitation already exists for {email}")
            return

        invitation = Invitation(email=email, agency_id=agency_id, role=role)
        db.add(invitation)
        db.commit()

        click.echo(f"✓ Created invite for {email} with role: {role}")
        click.echo(f"  Agency: {agency.name}")
        click.echo(f"  Invitation ID: {invitation.id}")

    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
@click.option("--agency-id", required=True, help="Agency ID")
def list_notifications(agency_id: str):
    """Print an agency's activity log, newest first."""
    db = SessionLocal()
    try:
        notifications = notification_service.get_notification_and_user(db, agency_id)
        if not notifications:
            click.echo("No notifications")
            return

        for n in notifications:
            click.echo(f"{n.created_at.isoformat()}  {n.notification}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
