"""
Repository layer for variant persistence and image storage.

Abstract gateways used by the workspace, plus HTTP implementations backed by
the catalog REST API.
"""

from src.repositories.gateway import (
    AssetStore,
    ImageUpload,
    PersistenceGateway,
    UploadedImage,
)
from src.repositories.http_gateway import HttpAssetStore, HttpPersistenceGateway

__all__ = [
    "AssetStore",
    "ImageUpload",
    "PersistenceGateway",
    "UploadedImage",
    "HttpAssetStore",
    "HttpPersistenceGateway",
]
