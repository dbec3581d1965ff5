"""Seed dev data from docs/seed-data.json into Postgres.

Loads clients (per accountant), shared and per-accountant templates, and
dossiers created from those templates through CreateDossierUseCase so derived
counters are computed like in production.

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-data.json]

Default path: docs/seed-data.json (relative to project root).
Requires: DATABASE_URL (Postgres) and migrated schema (alembic upgrade head).
"""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

from dossierhub.application.dtos.dossier import DocumentRequestTemplate
from dossierhub.application.use_cases.dossiers import (
    CreateDossierUseCase,
    DossierTemplateService,
    RecomputeDossierStateUseCase,
)
from dossierhub.infrastructure.persistence import database as db_mod
from dossierhub.infrastructure.persistence.repositories import (
    ClientRepository,
    DocumentRequestRepository,
    DossierRepository,
    DossierTemplateRepository,
)


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


def _parse_date(s: str | None) -> datetime | None:
    if not s:
        return None
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _items(raw: list[dict]) -> list[DocumentRequestTemplate]:
    return [
        DocumentRequestTemplate(
            title=i["title"],
            document_type=i["document_type"],
            quantite_min=i.get("quantite_min", 1),
            quantite_max=i.get("quantite_max", 1),
            obligatoire=i.get("obligatoire", True),
            description=i.get("description"),
            accepted_formats=i.get("accepted_formats", "*"),
            max_size_mb=i.get("max_size_mb"),
            instructions=i.get("instructions"),
        )
        for i in raw
    ]


async def run(path: Path) -> None:
    _load_env()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)

    db_mod._ensure_engine()
    if db_mod.AsyncSessionLocal is None:
        print(
            "AsyncSessionLocal not configured. Set DATABASE_URL and run: alembic upgrade head",
            file=sys.stderr,
        )
        sys.exit(1)

    async with db_mod.AsyncSessionLocal() as session:
        async with session.begin():
            client_repo = ClientRepository(session)
            dossier_repo = DossierRepository(session)
            templates = DossierTemplateService(DossierTemplateRepository(session))
            create_dossier = CreateDossierUseCase(
                dossier_repo=dossier_repo,
                client_repo=client_repo,
                recompute=RecomputeDossierStateUseCase(
                    dossier_repo, DocumentRequestRepository(session)
                ),
            )

            template_ids: dict[str, str] = {}
            for t in data.get("templates", []):
                created = await templates.create_template(
                    name=t["name"],
                    items=_items(t["items"]),
                    accountant_id=t.get("accountant_id"),
                )
                template_ids[t["key"]] = created.id
                print(f"Template {created.name} ({len(created.items)} item(s)) -> {created.id}")

            for c in data.get("clients", []):
                client = await client_repo.create_client(
                    accountant_id=c["accountant_id"],
                    company_name=c["company_name"],
                    email=c.get("email"),
                    activity_type=c.get("activity_type"),
                )
                print(f"  Client {client.company_name} -> {client.id}")
                for d in c.get("dossiers", []):
                    draft = await templates.build_draft(
                        template_ids[d["template"]],
                        d["name"],
                        period=d.get("period"),
                        due_date=_parse_date(d.get("due_date")),
                        accountant_id=c["accountant_id"],
                    )
                    dossier = await create_dossier.execute(
                        client.id, draft, c["accountant_id"]
                    )
                    print(f"    Dossier {dossier.name} [{dossier.status.value}] -> {dossier.id}")

    print("Seed complete.")


def main() -> None:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else _project_root() / "docs" / "seed-data.json"
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
