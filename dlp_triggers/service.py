# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Calls the DLP API to manage job triggers."""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import dlp_v2

from dlp_triggers.errors import RemoteError
from dlp_triggers.trigger import TriggerDefinition

logger = logging.getLogger(__name__)

# Failures creating the client or calling the API.
REMOTE_ERRORS = (GoogleAPIError, GoogleAuthError)


@dataclasses.dataclass(frozen=True)
class TriggerSummary:
    """Represents the listed fields of a job trigger."""
    name: str
    create_time: str
    update_time: str
    display_name: str
    description: str
    status: str
    error_count: int


def _format_time(value) -> str:
    if not value:
        return ""
    return value.isoformat()


def _status_name(value) -> str:
    # Values unknown to this library version come back as plain ints.
    try:
        return dlp_v2.JobTrigger.Status(value).name
    except ValueError:
        return str(value)


def summarize(job_trigger: dlp_v2.JobTrigger) -> TriggerSummary:
    """Projects a job trigger onto the fields shown when listing."""
    return TriggerSummary(
        name=job_trigger.name,
        create_time=_format_time(job_trigger.create_time),
        update_time=_format_time(job_trigger.update_time),
        display_name=job_trigger.display_name,
        description=job_trigger.description,
        status=_status_name(job_trigger.status),
        error_count=len(job_trigger.errors),
    )


class TriggerService(ABC):
    """Interface of the service storing job triggers.

    Instances are used as context managers so the session is released once
    the call is done, whether it succeeded or not.
    """

    @abstractmethod
    def create_trigger(self, parent: str,
                       definition: TriggerDefinition) -> dlp_v2.JobTrigger:
        """Creates a job trigger.

        Args:
            parent: The parent resource, e.g. projects/my-project.
            definition: The trigger to be created.

        Returns:
            The job trigger as stored by the service.
        """

    @abstractmethod
    def list_triggers(self, parent: str) -> Iterator[TriggerSummary]:
        """Yields the job triggers of a parent resource, page by page."""

    @abstractmethod
    def delete_trigger(self, name: str) -> None:
        """Deletes the job trigger with the fully qualified name."""

    def close(self) -> None:
        """Releases the session to the service."""

    def __enter__(self) -> "TriggerService":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class DlpTriggerService(TriggerService):
    """Manages job triggers through the DLP API."""

    def __init__(self, client: Optional[dlp_v2.DlpServiceClient] = None):
        """Initializes the class with an optional client.

        Args:
            client: The DLP client to use. Optional, a client using the
                application default credentials is created on first use.
        """
        self._client = client

    @property
    def client(self) -> dlp_v2.DlpServiceClient:
        """The DLP client, created on first use."""
        if self._client is None:
            self._client = dlp_v2.DlpServiceClient()
        return self._client

    def create_trigger(self, parent: str,
                       definition: TriggerDefinition) -> dlp_v2.JobTrigger:
        request = dlp_v2.CreateJobTriggerRequest(
            parent=parent,
            job_trigger=definition.to_job_trigger(),
        )
        if definition.trigger_id:
            request.trigger_id = definition.trigger_id
        logger.debug("Creating job trigger %r under %s",
                     definition.trigger_id, parent)
        try:
            return self.client.create_job_trigger(request=request)
        except REMOTE_ERRORS as error:
            raise RemoteError(str(error), error) from error

    def list_triggers(self, parent: str) -> Iterator[TriggerSummary]:
        logger.debug("Listing job triggers under %s", parent)
        try:
            # The pager fetches the following pages while iterating.
            pager = self.client.list_job_triggers(request={"parent": parent})
            for job_trigger in pager:
                yield summarize(job_trigger)
        except REMOTE_ERRORS as error:
            raise RemoteError(str(error), error) from error

    def delete_trigger(self, name: str) -> None:
        logger.debug("Deleting job trigger %s", name)
        try:
            self.client.delete_job_trigger(request={"name": name})
        except REMOTE_ERRORS as error:
            raise RemoteError(str(error), error) from error

    def close(self) -> None:
        if self._client is not None:
            self._client.transport.close()
            self._client = None
