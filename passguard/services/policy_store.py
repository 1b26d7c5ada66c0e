# passguard/services/policy_store.py
"""Policy configuration store
Holds the single active policy; every write is validated before the swap
"""
import threading
from typing import Optional

from loguru import logger

from passguard.errors import PolicyValidationError
from passguard.models.policy import PolicyConfiguration
from passguard.services.persistence import PersistenceCollaborator


class PolicyStore:
    """
    Owner of the active PolicyConfiguration

    Policies are immutable, so get() hands out the current snapshot without
    locking; writers are serialised and replace the whole object.
    """

    def __init__(self, default: Optional[PolicyConfiguration] = None,
                 persistence: Optional[PersistenceCollaborator] = None):
        self.default = default or PolicyConfiguration()
        errors = self.default.violations()
        if errors:
            raise PolicyValidationError(errors)

        self.persistence = persistence
        self._write_lock = threading.Lock()
        self._policy = self.default

    def get(self) -> PolicyConfiguration:
        return self._policy

    def set(self, candidate: PolicyConfiguration) -> PolicyConfiguration:
        """
        Validate and activate a new policy

        Raises:
            PolicyValidationError: Candidate breaks one or more invariants;
                the active policy is left unchanged
        """
        errors = candidate.violations()
        if errors:
            logger.warning(f"Rejected policy update: {'; '.join(errors)}")
            raise PolicyValidationError(errors)

        with self._write_lock:
            if self.persistence is not None:
                self.persistence.save_policy(candidate)
            self._policy = candidate

        logger.info("Password policy updated")
        return candidate

    def reset_to_default(self) -> PolicyConfiguration:
        return self.set(self.default)

    def load(self) -> PolicyConfiguration:
        """Activate the persisted policy, keeping the current one when none is stored"""
        if self.persistence is None:
            return self._policy

        stored = self.persistence.load_policy()
        if stored is None:
            return self._policy

        errors = stored.violations()
        if errors:
            raise PolicyValidationError(errors)

        with self._write_lock:
            self._policy = stored
        logger.info("Password policy loaded from storage")
        return stored
