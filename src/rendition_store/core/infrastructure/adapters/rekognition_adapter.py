"""Thin adapter for interacting with Amazon Rekognition."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import boto3

from rendition_store.core.infrastructure.adapters.s3_adapter import build_client_kwargs
from rendition_store.core.utils.config import RenditionConfig


class _Boto3RekognitionClient(Protocol):
    """Internal typing for boto3 Rekognition client (AWS-facing only)."""

    def detect_labels(
        self,
        *,
        Image: Mapping[str, bytes],
        MaxLabels: int,
        MinConfidence: float,
    ) -> Mapping[str, Any]: ...

    def detect_faces(
        self,
        *,
        Image: Mapping[str, bytes],
        Attributes: Sequence[str],
    ) -> Mapping[str, Any]: ...


class RekognitionAdapterProtocol(Protocol):
    """Minimal Rekognition adapter protocol (repository-facing)."""

    def detect_labels(
        self,
        *,
        image: bytes,
        max_labels: int,
        min_confidence: float,
    ) -> list[Mapping[str, Any]]: ...

    def detect_faces(
        self,
        *,
        image: bytes,
        attributes: Sequence[str],
    ) -> list[Mapping[str, Any]]: ...


class RekognitionAdapter:
    """Low-level Rekognition operations (mechanical, no error handling).

    Errors bubble up to the vision repository, which absorbs them.
    """

    def __init__(self, config: RenditionConfig) -> None:
        self._config = config
        self._rekognition: _Boto3RekognitionClient | None = None

    @property
    def _client(self) -> _Boto3RekognitionClient:
        """Create the client on first use so a missing region fails inside a call."""
        if self._rekognition is None:
            self._rekognition = boto3.client(
                "rekognition",
                **build_client_kwargs(
                    region=self._config.rekognition_region,
                    access_key_id=self._config.rekognition_access_key_id,
                    secret_access_key=self._config.rekognition_secret_access_key,
                ),
            )
        return self._rekognition

    def detect_labels(
        self,
        *,
        image: bytes,
        max_labels: int,
        min_confidence: float,
    ) -> list[Mapping[str, Any]]:
        """Return the raw ``Labels`` entries for an image."""
        response = self._client.detect_labels(
            Image={"Bytes": image},
            MaxLabels=max_labels,
            MinConfidence=min_confidence,
        )
        return list(response.get("Labels") or [])

    def detect_faces(
        self,
        *,
        image: bytes,
        attributes: Sequence[str],
    ) -> list[Mapping[str, Any]]:
        """Return the raw ``FaceDetails`` entries for an image."""
        response = self._client.detect_faces(
            Image={"Bytes": image},
            Attributes=list(attributes),
        )
        return list(response.get("FaceDetails") or [])
