#!/usr/bin/env python3
"""
Classification boundary tests against a mocked HTTP endpoint.
"""

from __future__ import annotations

import json
import unittest

import httpx

from control.density import FALLBACK_SNAPSHOT, TrafficLevel
from vision.classifier import Classifier, HttpClassifier, to_snapshot
from vision.schemas import AnalysisResultModel

URL = "http://classifier.test/classify"

GOOD_BODY = {
    "breakdown": {"bikes": 6, "cars": 10, "autos": 4, "buses": 2, "trucks": 1},
    "totalWeight": 6 + 20 + 8 + 6 + 3,
    "trafficLevel": "Medium",
    "ambulanceDetected": False,
    "accidentDetected": True,
}


def _classifier(handler) -> HttpClassifier:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpClassifier(URL, timeout_s=1.0, client=client)


class HttpClassifierTests(unittest.TestCase):
    def test_valid_answer_becomes_snapshot(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=GOOD_BODY)

        snap = _classifier(handler).classify("aGVsbG8=", road_id="A")
        self.assertEqual(seen["body"], {"image": "aGVsbG8=", "mimeType": "image/jpeg"})
        self.assertEqual(snap.total_count, 23)
        self.assertEqual(snap.total_weight, 43)
        self.assertEqual(snap.traffic_level, TrafficLevel.MEDIUM)
        self.assertTrue(snap.accident_detected)
        self.assertFalse(snap.ambulance_detected)

    def test_server_error_falls_back(self) -> None:
        classifier = _classifier(lambda request: httpx.Response(503))
        with self.assertLogs("vision.classifier", level="WARNING"):
            self.assertEqual(classifier.classify("aGVsbG8="), FALLBACK_SNAPSHOT)

    def test_timeout_falls_back(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        self.assertEqual(_classifier(handler).classify("aGVsbG8="), FALLBACK_SNAPSHOT)

    def test_connection_error_falls_back(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        self.assertEqual(_classifier(handler).classify("aGVsbG8="), FALLBACK_SNAPSHOT)

    def test_malformed_body_falls_back(self) -> None:
        bad = {"breakdown": {"bikes": -3}, "trafficLevel": "Gridlock"}
        classifier = _classifier(lambda request: httpx.Response(200, json=bad))
        self.assertEqual(classifier.classify("aGVsbG8="), FALLBACK_SNAPSHOT)

    def test_non_json_body_falls_back(self) -> None:
        classifier = _classifier(lambda request: httpx.Response(200, text="<html>"))
        self.assertEqual(classifier.classify("aGVsbG8="), FALLBACK_SNAPSHOT)


class ClassifierInterfaceTests(unittest.TestCase):
    def test_classifier_without_classify_cannot_be_created(self) -> None:
        class Blind(Classifier):
            pass

        with self.assertRaises(TypeError):
            Blind()


class ToSnapshotTests(unittest.TestCase):
    def test_derived_fields_are_recomputed(self) -> None:
        body = dict(GOOD_BODY, totalWeight=999, trafficLevel="High")
        with self.assertLogs("vision.classifier", level="WARNING") as captured:
            snap = to_snapshot(AnalysisResultModel.model_validate(body), road_id="C")
        self.assertEqual(snap.total_weight, 43)
        self.assertEqual(snap.traffic_level, TrafficLevel.MEDIUM)
        self.assertEqual(len(captured.records), 2)

    def test_derived_fields_optional(self) -> None:
        model = AnalysisResultModel.model_validate(
            {"breakdown": {"trucks": 11}, "ambulanceDetected": True}
        )
        snap = to_snapshot(model)
        self.assertEqual(snap.total_weight, 33)
        self.assertEqual(snap.traffic_level, TrafficLevel.LOW)
        self.assertTrue(snap.ambulance_detected)

    def test_whole_number_floats_accepted(self) -> None:
        model = AnalysisResultModel.model_validate({"breakdown": {"cars": 3.0}})
        self.assertEqual(to_snapshot(model).total_weight, 6)


if __name__ == "__main__":
    unittest.main()
