# billing/services/pricing/__init__.py
"""
Transaction pricing and voucher settlement.

Modules:
- config: PricingConfig value object built from settings
- errors: PricingError taxonomy and BookkeepingWarning
- money: Integer money arithmetic (discount, tax, total)
- vouchers: VoucherResolver (affiliate first, then generic)
- duration: DurationPricer for add-on purchases
- settlement_code: SettlementCodeGenerator
- assembler: TransactionAssembler orchestrating the purchase flow
- expiry: Expiry of stale unpaid transactions
"""

# Import from the submodules directly:
#   from billing.services.pricing.assembler import TransactionAssembler
