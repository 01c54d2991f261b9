"""SQLAlchemy-backed repository for votes, options and user votes."""

from datetime import datetime

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from settlement_engine.application.ports.database import DatabaseEnginePort
from settlement_engine.application.ports.vote_repository import (
    VoteRepositoryPort,
)
from settlement_engine.domain.errors import ConflictError, NotFoundError
from settlement_engine.domain.models.vote import CastAction, Vote, VoteOption
from settlement_engine.infrastructure.logging.logger import get_app_logger
from settlement_engine.infrastructure.schema import (
    user_votes_table as user_votes,
    vote_options_table as options,
    votes_table as votes,
)
from settlement_engine.utils.utils import utcnow


DEFAULT_CAST_RETRIES = 3


class SqlAlchemyVoteRepository(VoteRepositoryPort):
    """Repository storing votes in the owned vote tables."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        cast_retries: int = DEFAULT_CAST_RETRIES,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the settlement engine.
            cast_retries: Attempts made by ``toggle`` when a concurrent cast
                hits the unique constraint.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._cast_retries = max(1, cast_retries)
        self._logger = logger or get_app_logger()

    def get(self, vote_id: int) -> Vote | None:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            return self._load(conn, votes.c.id == vote_id)

    def get_by_expense(self, expense_id: int) -> Vote | None:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            return self._load(conn, votes.c.expense_id == expense_id)

    def get_by_option(self, option_id: int) -> Vote | None:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            vote_id = conn.execute(
                select(options.c.vote_id).where(options.c.id == option_id)
            ).scalar_one_or_none()
            if vote_id is None:
                return None
            return self._load(conn, votes.c.id == vote_id)

    def create(
        self,
        expense_id: int,
        expense_item_ids: list[int],
        close_at: datetime | None,
    ) -> tuple[Vote, bool]:
        """Create the vote of an expense unless one exists already.

        When a concurrent request inserts the vote first, the unique
        constraint on ``votes.expense_id`` rejects this insert and the
        winner's vote is returned instead.
        """
        existing = self.get_by_expense(expense_id)
        if existing is not None:
            return existing, False

        engine = self._db_port.get_engine()
        try:
            with engine.begin() as conn:
                result = conn.execute(
                    insert(votes).values(
                        expense_id=expense_id,
                        closed=False,
                        close_at=close_at,
                        created_at=utcnow(),
                    )
                )
                vote_id = result.inserted_primary_key[0]
                if expense_item_ids:
                    conn.execute(
                        insert(options),
                        [
                            {"vote_id": vote_id, "expense_item_id": item_id}
                            for item_id in expense_item_ids
                        ],
                    )
        except IntegrityError as exc:
            existing = self.get_by_expense(expense_id)
            if existing is None:
                raise ConflictError(
                    f"Could not create vote for expense {expense_id}"
                ) from exc
            self._logger.info(
                f"Vote for expense {expense_id} was created concurrently; "
                f"reusing vote {existing.id}"
            )
            return existing, False

        return self.get(vote_id), True

    def toggle(self, user_id: int, option_id: int) -> CastAction:
        """Insert the user's vote on the option, or delete it if present.

        Raises:
            NotFoundError: If the option does not exist.
            ConflictError: If the vote is closed, or the retries run out.
        """
        engine = self._db_port.get_engine()
        last_error: IntegrityError | None = None
        for attempt in range(1, self._cast_retries + 1):
            try:
                with engine.begin() as conn:
                    return self._toggle(conn, user_id, option_id)
            except IntegrityError as exc:
                last_error = exc
                self._logger.warning(
                    f"Concurrent vote on option {option_id} by user "
                    f"{user_id} (attempt {attempt}/{self._cast_retries})"
                )
        raise ConflictError(
            f"Could not record vote of user {user_id} on option {option_id}"
        ) from last_error

    def voters_by_option(self, vote_id: int) -> dict[int, frozenset[int]]:
        query = (
            select(options.c.id, user_votes.c.user_id)
            .select_from(
                options.outerjoin(
                    user_votes,
                    user_votes.c.vote_option_id == options.c.id,
                )
            )
            .where(options.c.vote_id == vote_id)
        )
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        voters: dict[int, set[int]] = {}
        for option_id, user_id in rows:
            voters.setdefault(option_id, set())
            if user_id is not None:
                voters[option_id].add(user_id)
        return {
            option_id: frozenset(user_ids)
            for option_id, user_ids in voters.items()
        }

    def delete_open(self, vote_id: int) -> bool:
        """Delete user votes, options and the vote, children first."""
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            closed = conn.execute(
                select(votes.c.closed)
                .where(votes.c.id == vote_id)
                .with_for_update()
            ).scalar_one_or_none()
            if closed is None or closed:
                return False
            option_ids = select(options.c.id).where(
                options.c.vote_id == vote_id
            )
            conn.execute(
                delete(user_votes).where(
                    user_votes.c.vote_option_id.in_(option_ids)
                )
            )
            conn.execute(delete(options).where(options.c.vote_id == vote_id))
            conn.execute(delete(votes).where(votes.c.id == vote_id))
        return True

    def close(self, vote_id: int) -> bool:
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            result = conn.execute(
                update(votes)
                .where(votes.c.id == vote_id, votes.c.closed.is_(False))
                .values(closed=True)
            )
        return result.rowcount == 1

    def update_close_at(self, vote_id: int, close_at: datetime) -> Vote:
        """Set a new deadline.

        Raises:
            NotFoundError: If the vote does not exist.
        """
        engine = self._db_port.get_engine()
        with engine.begin() as conn:
            conn.execute(
                update(votes)
                .where(votes.c.id == vote_id)
                .values(close_at=close_at)
            )
            vote = self._load(conn, votes.c.id == vote_id)
        if vote is None:
            raise NotFoundError("Vote", vote_id)
        return vote

    def list_open_expired(self, now: datetime) -> list[Vote]:
        engine = self._db_port.get_engine()
        with engine.connect() as conn:
            vote_ids = conn.execute(
                select(votes.c.id)
                .where(
                    votes.c.closed.is_(False),
                    votes.c.close_at.is_not(None),
                    votes.c.close_at <= now,
                )
                .order_by(votes.c.id)
            ).scalars().all()
            return [
                self._load(conn, votes.c.id == vote_id)
                for vote_id in vote_ids
            ]

    def _toggle(
        self,
        conn: Connection,
        user_id: int,
        option_id: int,
    ) -> CastAction:
        closed = conn.execute(
            select(votes.c.closed)
            .select_from(votes.join(options, options.c.vote_id == votes.c.id))
            .where(options.c.id == option_id)
        ).scalar_one_or_none()
        if closed is None:
            raise NotFoundError("VoteOption", option_id)
        if closed:
            raise ConflictError(f"Vote of option {option_id} is closed")

        existing_id = conn.execute(
            select(user_votes.c.id).where(
                user_votes.c.user_id == user_id,
                user_votes.c.vote_option_id == option_id,
            )
        ).scalar_one_or_none()
        if existing_id is not None:
            conn.execute(
                delete(user_votes).where(user_votes.c.id == existing_id)
            )
            return CastAction.RETRACTED
        conn.execute(
            insert(user_votes).values(
                user_id=user_id,
                vote_option_id=option_id,
            )
        )
        return CastAction.CAST

    @staticmethod
    def _load(conn: Connection, condition) -> Vote | None:
        """Read one vote matching ``condition`` with its options."""
        row = conn.execute(select(votes).where(condition)).first()
        if row is None:
            return None
        option_rows = conn.execute(
            select(options)
            .where(options.c.vote_id == row.id)
            .order_by(options.c.id)
        ).all()
        return Vote(
            id=row.id,
            expense_id=row.expense_id,
            closed=bool(row.closed),
            close_at=row.close_at,
            options=tuple(
                VoteOption(
                    id=option.id,
                    vote_id=option.vote_id,
                    expense_item_id=option.expense_item_id,
                )
                for option in option_rows
            ),
        )


__all__ = ["SqlAlchemyVoteRepository", "DEFAULT_CAST_RETRIES"]
