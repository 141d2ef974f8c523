from __future__ import annotations

from flask import Flask, send_from_directory

from ..container import Container
from .photo_store import LocalPhotoStore


def register(app: Flask, container: Container) -> None:
    """Serve locally stored selfies under the URL prefix the store hands out."""

    store = container.photo_store
    if not isinstance(store, LocalPhotoStore) or not store.base_url.startswith("/"):
        return

    root = store.root.resolve()

    @app.route(f"{store.base_url}/<path:path>", methods=["GET"], endpoint="selfie_file")
    def selfie_file(path: str):
        return send_from_directory(root, path)
