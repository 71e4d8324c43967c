# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Builds the job trigger definitions submitted to the DLP API."""

import dataclasses
from typing import Iterable, List, Optional, Tuple, Union

from google.cloud import dlp_v2
from google.protobuf import duration_pb2

from dlp_triggers.errors import ValidationError

SECONDS_PER_DAY = 24 * 3600


def project_path(project_id: str) -> str:
    """Returns the parent resource used for every trigger call."""
    return f"projects/{project_id}"


def trigger_name(project_id: str, trigger_id: str) -> str:
    """Returns the fully qualified name of a job trigger.

    Args:
        project_id: The Google Cloud project owning the trigger.
        trigger_id: The trigger ID, e.g. "my-trigger".

    Returns:
        The name as projects/<project_id>/jobTriggers/<trigger_id>.
    """
    return f"{project_path(project_id)}/jobTriggers/{trigger_id}"


def likelihood_names() -> List[str]:
    """Lists the likelihood levels from LIKELIHOOD_UNSPECIFIED upwards."""
    return [level.name for level in sorted(dlp_v2.Likelihood)]


def parse_likelihood(
        value: Union[str, dlp_v2.Likelihood, None]) -> dlp_v2.Likelihood:
    """Maps a likelihood name to its enum level.

    Args:
        value: The level name (case insensitive), e.g. "POSSIBLE". None or an
            empty string selects LIKELIHOOD_UNSPECIFIED.

    Returns:
        The matching dlp_v2.Likelihood member.

    Raises:
        ValidationError: If the name is not a known likelihood level.
    """
    if isinstance(value, dlp_v2.Likelihood):
        return value
    if value is None or not str(value).strip():
        return dlp_v2.Likelihood.LIKELIHOOD_UNSPECIFIED
    try:
        return dlp_v2.Likelihood[str(value).strip().upper()]
    except KeyError as err:
        raise ValidationError(
            f"Unknown likelihood {value!r}, expected one of: "
            f"{', '.join(likelihood_names())}") from err


def _parse_count(name: str, value: Union[int, str, None]) -> int:
    # bool is an int subclass but never a valid count.
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as err:
            raise ValidationError(
                f"{name} must be an integer, got {value!r}") from err
    raise ValidationError(f"{name} must be an integer, got {value!r}")


@dataclasses.dataclass(frozen=True)
class TriggerDefinition:
    """A scheduled inspection of a Cloud Storage location."""
    storage_location: str
    scan_period_days: int
    info_types: Tuple[str, ...] = ()
    min_likelihood: dlp_v2.Likelihood = (
        dlp_v2.Likelihood.LIKELIHOOD_UNSPECIFIED)
    max_findings_per_request: int = 0
    trigger_id: Optional[str] = None
    display_name: str = ""
    description: str = ""
    status: dlp_v2.JobTrigger.Status = dlp_v2.JobTrigger.Status.HEALTHY

    @property
    def recurrence_period_seconds(self) -> int:
        """Seconds to wait between two scans."""
        return self.scan_period_days * SECONDS_PER_DAY

    def to_job_trigger(self) -> dlp_v2.JobTrigger:
        """Converts the definition into the DLP API message.

        Returns:
            A JobTrigger with the inspect job and its schedule. The trigger
            ID is not part of it; it travels in the create request.
        """
        file_set = dlp_v2.CloudStorageOptions.FileSet(
            url=self.storage_location)
        storage_config = dlp_v2.StorageConfig(
            cloud_storage_options=dlp_v2.CloudStorageOptions(
                file_set=file_set))

        finding_limits = dlp_v2.InspectConfig.FindingLimits(
            max_findings_per_request=self.max_findings_per_request)
        inspect_config = dlp_v2.InspectConfig(
            info_types=[dlp_v2.InfoType(name=name)
                        for name in self.info_types],
            min_likelihood=self.min_likelihood,
            limits=finding_limits,
        )

        inspect_job = dlp_v2.InspectJobConfig(
            inspect_config=inspect_config,
            storage_config=storage_config,
        )

        # Scan the bucket every scan_period_days days.
        duration = duration_pb2.Duration(
            seconds=self.recurrence_period_seconds)
        schedule = dlp_v2.Schedule(recurrence_period_duration=duration)

        return dlp_v2.JobTrigger(
            display_name=self.display_name,
            description=self.description,
            inspect_job=inspect_job,
            triggers=[dlp_v2.JobTrigger.Trigger(schedule=schedule)],
            status=self.status,
        )


def build_trigger(
    storage_location: Optional[str],
    scan_period_days: Union[int, str, None],
    min_likelihood: Union[str, dlp_v2.Likelihood, None] = None,
    max_findings: Union[int, str, None] = 0,
    info_types: Optional[Iterable[str]] = None,
    trigger_id: Optional[str] = None,
    display_name: Optional[str] = "",
    description: Optional[str] = "",
) -> TriggerDefinition:
    """Validates the trigger parameters and builds its definition.

    Args:
        storage_location: URL of the Cloud Storage location to scan, e.g.
            gs://my-bucket-name.
        scan_period_days: How often to wait between scans, in days. The
            minimum is 1 day.
        min_likelihood: Minimum likelihood required before returning a
            match. Defaults to LIKELIHOOD_UNSPECIFIED.
        max_findings: Maximum number of findings to report per request.
            0 means the server maximum.
        info_types: Info type names to match, e.g. PHONE_NUMBER. Empty uses
            the service default set.
        trigger_id: ID of the trigger to create. Optional, the service
            assigns one when missing.
        display_name: Display name of the trigger. Optional.
        description: Description of the trigger. Optional.

    Returns:
        The immutable trigger definition.

    Raises:
        ValidationError: If any parameter is missing or invalid.
    """
    if storage_location is None or not storage_location.strip():
        raise ValidationError("A Cloud Storage URL is required, e.g. "
                              "gs://my-bucket-name")

    if scan_period_days is None:
        raise ValidationError("A scan period in days is required")
    scan_period = _parse_count("Scan period", scan_period_days)
    if scan_period < 1:
        raise ValidationError(
            f"Scan period must be at least 1 day, got {scan_period}")

    likelihood = parse_likelihood(min_likelihood)

    findings = _parse_count(
        "Max findings", 0 if max_findings is None else max_findings)
    if findings < 0:
        raise ValidationError(
            f"Max findings must not be negative, got {findings}")

    names = tuple(info_types or ())
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(
                f"Info type names must be non-empty strings, got {name!r}")

    return TriggerDefinition(
        storage_location=storage_location.strip(),
        scan_period_days=scan_period,
        info_types=names,
        min_likelihood=likelihood,
        max_findings_per_request=findings,
        trigger_id=trigger_id or None,
        display_name=display_name or "",
        description=description or "",
    )
