# townhub/services/economy.py
import logging
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from townhub.models.plugin import Plugin
from townhub.models.user import Account, Transaction, User
from townhub.services.progression import apply_experience

logger = logging.getLogger(__name__)

DOUBLES_DAY_ROUTE_PATH = "/doubles-day"


def to_money(value: float | Decimal) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def is_doubles_day_enabled(db: Session) -> bool:
    """Doubles Day doubles chore and job challenge earnings while its plugin is on."""
    plugin = db.query(Plugin).filter(Plugin.route_path == DOUBLES_DAY_ROUTE_PATH).first()
    return bool(plugin and plugin.enabled)


def credit_earnings(
    db: Session, *, user: User, amount: Decimal, description: str
) -> Account | None:
    """Add earnings to the user's account and record a deposit.

    Does not commit; the caller owns the unit of work.
    """
    account = user.account
    if account is None or amount <= 0:
        return account
    account.balance = to_money((account.balance or 0) + amount)
    db.add(
        Transaction(
            to_account_id=account.id,
            amount=amount,
            transaction_type="deposit",
            description=description,
        )
    )
    logger.info("Credited %s to account %s (%s)", amount, account.account_number, description)
    return account


def award_experience(user: User, gained: int) -> int | None:
    """Apply XP to the user's job progress; returns the new level if it changed."""
    current_level = user.job_level or 1
    new_xp, new_level = apply_experience(
        current_level, user.job_experience_points or 0, gained
    )
    user.job_experience_points = new_xp
    user.job_level = new_level
    return new_level if new_level > current_level else None
