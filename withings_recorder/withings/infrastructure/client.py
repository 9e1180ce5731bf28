"""HTTP-backed implementation of the Withings measurements port."""
from __future__ import annotations

from typing import List, Sequence

import httpx
from pydantic import ValidationError

from ...models import FetchWindow, RawMeasureGroup
from ...settings import Settings
from ..application.ports import (
    MeasurementsPort,
    ProviderSessionError,
    TokenRejectedError,
)

BODY_CATEGORY = 1
INVALID_TOKEN_STATUS = 401


class WithingsMeasurementsAdapter(MeasurementsPort):
    """Read measurement groups from the Withings ``getmeas`` endpoint."""

    def __init__(self, http_client: httpx.Client, settings: Settings) -> None:
        self._http_client = http_client
        self._settings = settings

    def fetch(
        self, access_token: str, window: FetchWindow, codes: Sequence[int]
    ) -> List[RawMeasureGroup]:
        """Issue a single ``getmeas`` request covering ``window``.

        Transport errors from httpx propagate unchanged; responses that do not
        look like a successful ``getmeas`` payload raise
        :class:`ProviderSessionError`.
        """

        params = {
            "action": "getmeas",
            "category": BODY_CATEGORY,
            "startdate": window.startdate,
            "enddate": window.enddate,
            "meastype": ",".join(str(code) for code in codes),
        }
        headers = {"Authorization": f"Bearer {access_token}"}
        response = self._http_client.get(
            f"{self._settings.wbsapi_url}/measure",
            headers=headers,
            params=params,
        )

        if response.status_code == 401:
            raise TokenRejectedError("Withings rejected the access token")
        if response.status_code != 200:
            raise ProviderSessionError(
                f"Withings measure request failed with HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderSessionError("Withings measure response is not JSON") from exc
        if not isinstance(data, dict):
            raise ProviderSessionError("Withings measure response is not an object")

        status = data.get("status")
        if status == INVALID_TOKEN_STATUS:
            raise TokenRejectedError(f"Withings API error: {data.get('error')}")
        if status != 0:
            raise ProviderSessionError(f"Withings API error: {data.get('error')}")

        body = data.get("body")
        if not isinstance(body, dict) or not isinstance(body.get("measuregrps"), list):
            raise ProviderSessionError("Withings measure response missing measuregrps")

        try:
            return [RawMeasureGroup.model_validate(group) for group in body["measuregrps"]]
        except ValidationError as exc:
            raise ProviderSessionError(f"Malformed Withings measure group: {exc}") from exc


def create_withings_measurements_adapter(
    *, http_client: httpx.Client, settings: Settings
) -> MeasurementsPort:
    """Create a Withings measurements adapter."""
    return WithingsMeasurementsAdapter(http_client=http_client, settings=settings)


__all__ = [
    "WithingsMeasurementsAdapter",
    "create_withings_measurements_adapter",
]
