from typing import Iterable, Mapping

from ..config import BASE_PRICE


def member_price(role: str, base_price: int = BASE_PRICE) -> int:
    """Price share for one member. "Both" plays two roles and pays double."""
    if role == "Both":
        return base_price * 2
    return base_price


def calculate_price(
    team_type: str,
    members: Iterable[Mapping],
    base_price: int = BASE_PRICE
) -> int:
    """
    Calculate the total charge for a team.

    The total is always computed here from the member roles; any total the
    client submits is ignored. Team type does not affect the price beyond
    the number of members it implies.
    """
    return sum(member_price(member.get("role"), base_price) for member in members)
