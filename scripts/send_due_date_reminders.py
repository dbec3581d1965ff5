"""Send due-date reminders for dossiers due within DUE_SOON_DAYS.

Usage:
    uv run python -m scripts.send_due_date_reminders [days]
If days is omitted, DUE_SOON_DAYS from config is used (default 3).
Intended for a daily cron job.
"""

import asyncio
import sys

from dotenv import load_dotenv

import dossierhub.infrastructure.persistence.database as database
from dossierhub.application.use_cases.dossiers import NotifyDueSoonUseCase
from dossierhub.core.config import get_settings
from dossierhub.infrastructure.persistence.repositories import DossierRepository
from dossierhub.infrastructure.services import LogOnlyNotificationDispatcher
from dossierhub.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Dispatch DUE_DATE_APPROACHING for every non-validated dossier in the window."""
    load_dotenv()
    settings = get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)
    days = int(sys.argv[1]) if len(sys.argv) > 1 else settings.due_soon_days
    if days < 0:
        print("days must be >= 0", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        use_case = NotifyDueSoonUseCase(
            DossierRepository(session),
            LogOnlyNotificationDispatcher(enabled=settings.notifications_enabled),
            due_soon_days=days,
        )
        sent = await use_case.execute()

    print(f"Done. Reminders dispatched: {sent}")


if __name__ == "__main__":
    asyncio.run(main())
