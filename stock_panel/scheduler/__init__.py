"""
Stock Panel - Background Jobs
"""
from stock_panel.scheduler.token_sweeper import TokenSweepScheduler, SWEEP_JOB_ID

__all__ = ["TokenSweepScheduler", "SWEEP_JOB_ID"]
