from .driver import run_summary, run_batch_summary

__all__ = ["run_summary", "run_batch_summary"]
