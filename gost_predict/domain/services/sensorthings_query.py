"""Query construction for SensorThings observation collections."""

from datetime import datetime, timezone

OBSERVATION_FIELDS = "result,phenomenonTime"
NEWEST_FIRST = "phenomenonTime desc"


def encode_url(url: str) -> str:
    """Percent-encode the characters the $filter syntax leaves raw."""
    return url.replace(" ", "%20").replace("'", "%27")


def format_instant(instant: datetime) -> str:
    """Format an instant as a UTC ``YYYY-MM-DDTHH:MM:SS.ffffffZ`` string."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    instant = instant.astimezone(timezone.utc)
    return f"{instant.year:04d}" + instant.strftime("-%m-%dT%H:%M:%S.%fZ")


def _observations_url(base_url: str, datastream_id: str) -> str:
    return f"{base_url.rstrip('/')}/v1.0/Datastreams({datastream_id})/Observations"


def build_window_query(base_url: str, datastream_id: str, since: datetime) -> str:
    """Observations of a datastream newer than ``since``, newest first."""
    return (
        f"{_observations_url(base_url, datastream_id)}"
        f"?$filter=phenomenonTime gt '{format_instant(since)}'"
        f"&$orderby={NEWEST_FIRST}"
        f"&$select={OBSERVATION_FIELDS}"
    )


def build_latest_query(base_url: str, datastream_id: str, top: int = 2) -> str:
    """The ``top`` most recent observations of a datastream, without a window."""
    return (
        f"{_observations_url(base_url, datastream_id)}"
        f"?$top={top}"
        f"&$orderby={NEWEST_FIRST}"
        f"&$select={OBSERVATION_FIELDS}"
    )
