"""Issue a signed access token for local testing of the API.

Usage:
    uv run python -m scripts.issue_access_token accountant <user_id>
    uv run python -m scripts.issue_access_token client <user_id> <client_id>
"""

import sys

from dotenv import load_dotenv

from dossierhub.domain.enums import ActorRole
from dossierhub.infrastructure.security.jwt import create_access_token


def main() -> None:
    """Print a bearer token carrying sub, role and (for clients) client_id."""
    load_dotenv()
    if len(sys.argv) < 3 or sys.argv[1] not in ActorRole.values():
        print(
            "Usage: uv run python -m scripts.issue_access_token "
            "<accountant|client> <user_id> [client_id]",
            file=sys.stderr,
        )
        sys.exit(1)
    role = ActorRole(sys.argv[1])
    claims = {"sub": sys.argv[2], "role": role.value}
    if role == ActorRole.CLIENT:
        if len(sys.argv) < 4:
            print("client tokens need a client_id", file=sys.stderr)
            sys.exit(1)
        claims["client_id"] = sys.argv[3]
    print(create_access_token(claims))


if __name__ == "__main__":
    main()
