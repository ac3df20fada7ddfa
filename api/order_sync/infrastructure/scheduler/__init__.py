from .sync_scheduler import SYNC_JOB_ID, SyncScheduler, build_sync_scheduler, reschedule_sync_job

__all__ = ["SYNC_JOB_ID", "SyncScheduler", "build_sync_scheduler", "reschedule_sync_job"]
