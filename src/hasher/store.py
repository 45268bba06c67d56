import enum
import threading
from dataclasses import dataclass, replace


class JobStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Job:
    id: int
    status: JobStatus = JobStatus.PENDING
    result: str | None = None

    @property
    def completed(self) -> bool:
        return self.status is JobStatus.COMPLETE


class DuplicateJobError(Exception):
    pass


class UnknownJobError(Exception):
    pass


class JobAlreadyCompleteError(Exception):
    pass


class JobStore:
    """Thread-safe in-memory table of jobs keyed by id.

    Jobs are immutable records. Completing a job swaps in a new record under
    the lock, so readers see either the pending record or the complete one
    with its result, never a mix of the two.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._jobs: dict[int, Job] = {}

    def create(self, job_id: int) -> Job:
        with self._lock:
            if job_id in self._jobs:
                raise DuplicateJobError(f"Job {job_id} already exists")
            job = Job(id=job_id)
            self._jobs[job_id] = job
            return job

    def get(self, job_id: int) -> Job | None:
        with self._lock:
            return self._jobs.get(job_id)

    def complete(self, job_id: int, result: str) -> Job:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise UnknownJobError(f"Job {job_id} does not exist")
            if job.completed:
                raise JobAlreadyCompleteError(f"Job {job_id} is already complete")
            done = replace(job, status=JobStatus.COMPLETE, result=result)
            self._jobs[job_id] = done
            return done

    def pending_count(self) -> int:
        with self._lock:
            return sum(1 for job in self._jobs.values() if not job.completed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
