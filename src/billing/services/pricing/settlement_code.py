# billing/services/pricing/settlement_code.py
"""
Settlement code generation.

A settlement code is a small random integer added to a transaction total so
that identical amounts from different payers can be told apart on the bank
statement. A code is held by a transaction for as long as it is ``pending``;
the partial unique constraint on Transaction enforces this, the lookup here
only avoids predictable collisions.
"""

import random
from collections.abc import Iterator

from billing.models.choices import PaymentStatus
from billingutils.logging import get_logger

from .config import PricingConfig
from .errors import SettlementCodeExhausted

logger = get_logger(__name__)


class SettlementCodeGenerator:
    """Draws codes uniformly from the configured range with a bounded retry budget."""

    def __init__(
        self,
        config: PricingConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or PricingConfig.from_settings()
        self.rng = rng or random.SystemRandom()

    def draw(self) -> int:
        return self.rng.randint(self.config.settlement_code_min, self.config.settlement_code_max)

    @staticmethod
    def is_taken(code: int) -> bool:
        """Whether a pending transaction currently holds ``code``."""
        from billing.models import Transaction

        return Transaction.objects.filter(
            settlement_code=code,
            payment_status=PaymentStatus.PENDING.value,
        ).exists()

    def candidates(self, exclude_active: bool = True) -> Iterator[int]:
        """
        Yield codes that looked free when drawn.

        At most ``settlement_code_max_attempts`` draws are made in total,
        including draws skipped because the code was taken.
        """
        attempts = self.config.settlement_code_max_attempts
        for attempt in range(1, attempts + 1):
            code = self.draw()
            if exclude_active and self.is_taken(code):
                logger.info("settlement_code_collision", code=code, attempt=attempt)
                continue
            yield code

    def generate(self, exclude_active: bool = True) -> int:
        """Return one free code or raise SettlementCodeExhausted."""
        for code in self.candidates(exclude_active):
            return code
        raise self.exhausted()

    def exhausted(self) -> SettlementCodeExhausted:
        attempts = self.config.settlement_code_max_attempts
        logger.error("settlement_code_exhausted", attempts=attempts)
        return SettlementCodeExhausted(details={"attempts": attempts})
