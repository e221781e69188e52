from .tasks import expire_stale_transactions_task

__all__ = ["expire_stale_transactions_task"]
