"""Background workers for billing service"""
from .autopay_runner import AutopayWorker

__all__ = ["AutopayWorker"]
