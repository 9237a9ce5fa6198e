"""
vision/classifier.py
====================
Client for the external image-classification service.

:meth:`HttpClassifier.classify` never raises for service problems: a
transport error, timeout, non-2xx status or malformed body all yield
:data:`~control.density.FALLBACK_SNAPSHOT` (no vehicles, Low traffic,
no ambulance, no accident).  No retry is attempted here.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import ValidationError

from control.density import FALLBACK_SNAPSHOT, DensitySnapshot, VehicleBreakdown, make_snapshot
from control.policy import DEFAULT_POLICY, SignalPolicy
from vision.schemas import AnalysisResultModel, ClassificationRequest

log = logging.getLogger(__name__)


def to_snapshot(
    result: AnalysisResultModel,
    road_id: str = "",
    policy: SignalPolicy = DEFAULT_POLICY,
) -> DensitySnapshot:
    """Convert a validated classifier answer into a snapshot.

    Weight and level are always recomputed from the breakdown; a
    classifier that disagrees is logged and overruled.
    """
    breakdown = VehicleBreakdown(**result.breakdown.model_dump())
    snapshot = make_snapshot(
        breakdown,
        ambulance_detected=result.ambulance_detected,
        accident_detected=result.accident_detected,
        policy=policy,
    )
    if result.total_weight is not None and result.total_weight != snapshot.total_weight:
        log.warning(
            "classifier weight mismatch road=%s reported=%s derived=%s",
            road_id, result.total_weight, snapshot.total_weight,
        )
    if result.traffic_level is not None and result.traffic_level != snapshot.traffic_level.value:
        log.warning(
            "classifier level mismatch road=%s reported=%s derived=%s",
            road_id, result.traffic_level, snapshot.traffic_level.value,
        )
    return snapshot


class Classifier(ABC):
    """Anything that turns a base64 road image into a density snapshot."""

    @abstractmethod
    def classify(self, image_b64: str, road_id: str = "") -> DensitySnapshot:
        ...


class HttpClassifier(Classifier):
    """
    Posts images to a classification endpoint over HTTP.

    Args:
        url (str): Endpoint accepting ``{"image": <base64>, "mimeType": ...}``.
        timeout_s (float): Per-request timeout in seconds.
        client (httpx.Client): Optional pre-built client (tests inject a MockTransport).
        policy (SignalPolicy): Weights and thresholds used for re-derivation.
    """

    def __init__(
        self,
        url: str,
        timeout_s: float = 15.0,
        client: Optional[httpx.Client] = None,
        policy: SignalPolicy = DEFAULT_POLICY,
    ):
        self.url = url
        self.timeout_s = timeout_s
        self.policy = policy
        self._client = client or httpx.Client(timeout=timeout_s)

    def classify(self, image_b64: str, road_id: str = "") -> DensitySnapshot:
        body = ClassificationRequest(image=image_b64).model_dump(by_alias=True)
        try:
            response = self._client.post(self.url, json=body, timeout=self.timeout_s)
            response.raise_for_status()
            result = AnalysisResultModel.model_validate(response.json())
        except httpx.TimeoutException as exc:
            log.warning("classifier timeout road=%s: %s", road_id, exc)
            return FALLBACK_SNAPSHOT
        except httpx.HTTPError as exc:
            log.warning("classifier unavailable road=%s: %s", road_id, exc)
            return FALLBACK_SNAPSHOT
        except ValidationError as exc:
            log.warning("classifier returned malformed result road=%s: %s", road_id, exc)
            return FALLBACK_SNAPSHOT
        except ValueError as exc:
            log.warning("classifier returned non-JSON body road=%s: %s", road_id, exc)
            return FALLBACK_SNAPSHOT

        snapshot = to_snapshot(result, road_id, self.policy)
        log.info(
            "classified road=%s count=%d weight=%d level=%s",
            road_id, snapshot.total_count, snapshot.total_weight,
            snapshot.traffic_level.value,
        )
        return snapshot

    def close(self) -> None:
        self._client.close()
