"""CLI adapter closing votes whose deadline has passed.

Meant to be run by an external scheduler (cron, systemd timer).
"""

from settlement_engine.infrastructure.container import (
    build_close_expired_votes_use_case,
)
from settlement_engine.infrastructure.logging.logger import get_usage_logger


def main() -> None:
    """Run the expired-vote job once."""
    use_case = build_close_expired_votes_use_case()

    closed_ids = use_case.run()

    get_usage_logger().info(
        f"close_expired_votes_cli closed votes {closed_ids}"
    )
    if closed_ids:
        ids = ", ".join(str(vote_id) for vote_id in closed_ids)
        print(f"Closed {len(closed_ids)} expired votes: {ids}")
    else:
        print("No expired votes to close.")


if __name__ == "__main__":  # pragma: no cover
    main()
