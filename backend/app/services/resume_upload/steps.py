"""
Upload pipeline steps, their order, and what a failure at each step means.
"""
from enum import Enum, IntEnum


class UploadStep(IntEnum):
    """Pipeline steps in execution order. Comparisons follow that order."""
    VALIDATION = 1
    PARSING = 2
    NORMALIZATION = 3
    STORAGE_PUT = 4
    DB_CREATE = 5
    ASSOCIATE_COMPANIES = 6
    ASSOCIATE_KEYWORDS = 7
    COMMIT = 8

    @property
    def label(self) -> str:
        return self.name.lower()


class FailurePolicy(str, Enum):
    ABORT = "abort"
    CONTINUE = "continue"


STEP_POLICIES: dict[UploadStep, FailurePolicy] = {
    UploadStep.VALIDATION: FailurePolicy.ABORT,
    UploadStep.PARSING: FailurePolicy.CONTINUE,
    UploadStep.NORMALIZATION: FailurePolicy.ABORT,
    UploadStep.STORAGE_PUT: FailurePolicy.ABORT,
    UploadStep.DB_CREATE: FailurePolicy.ABORT,
    UploadStep.ASSOCIATE_COMPANIES: FailurePolicy.CONTINUE,
    UploadStep.ASSOCIATE_KEYWORDS: FailurePolicy.CONTINUE,
    UploadStep.COMMIT: FailurePolicy.ABORT,
}


def policy_for(step: UploadStep) -> FailurePolicy:
    return STEP_POLICIES[step]


def artifact_stored(failed_step: UploadStep) -> bool:
    """True when the artifact exists, i.e. the failure came after storage_put completed."""
    return failed_step > UploadStep.STORAGE_PUT
