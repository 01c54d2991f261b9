"""Per-item division of a closed vote, netted into one share per debtor."""

from collections.abc import Iterable

from settlement_engine.domain.models.settlement import Share
from settlement_engine.domain.models.vote import ItemTally


def net_item_shares(
    payer_id: int,
    tallies: Iterable[ItemTally],
) -> tuple[list[Share], list[int]]:
    """Divide each option's price among its voters and net by debtor.

    An option nobody voted for is skipped and its cost stays with the payer.
    Each voter owes ``price // voter_count`` for the option; the remainder of
    that division stays with the payer too. The payer's own selections never
    produce a share.

    Args:
        payer_id: Creditor of the settlement.
        tallies: Priced options with their voters.

    Returns:
        tuple[list[Share], list[int]]: Netted shares in first-seen debtor
        order, and the ids of options skipped for having no voters.
    """
    totals: dict[int, int] = {}
    skipped: list[int] = []
    for tally in tallies:
        if not tally.voter_ids:
            skipped.append(tally.option_id)
            continue
        per_voter = tally.price // len(tally.voter_ids)
        for voter_id in sorted(tally.voter_ids):
            if voter_id == payer_id:
                continue
            totals[voter_id] = totals.get(voter_id, 0) + per_voter
    shares = [
        Share(debtor_id=debtor_id, amount=amount)
        for debtor_id, amount in totals.items()
    ]
    return shares, skipped


__all__ = ["net_item_shares"]
