from factory_sim.models.job import Job, JobStatus, UNKNOWN_TIME
from factory_sim.models.server import ServerStatus

__all__ = ["Job", "JobStatus", "UNKNOWN_TIME", "ServerStatus"]
