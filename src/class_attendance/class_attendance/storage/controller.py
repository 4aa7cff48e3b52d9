from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.http import error_response, json_errors, read_json
from ..container import Container
from .objects import OBJECT_PREFIX


def register(app: Flask, container: Container) -> None:
    storage = container.object_storage

    @app.route("/api/objects/upload", methods=["POST"], endpoint="request_upload_url")
    @json_errors("Failed to get upload URL")
    def request_upload_url():
        return jsonify({"uploadURL": storage.create_upload_url()})

    @app.route("/objects/uploads/<object_id>", methods=["PUT"], endpoint="upload_object")
    @json_errors("Failed to store object")
    def upload_object(object_id: str):
        data = request.get_data()
        if not data:
            return error_response("Request body is empty", 400)
        return jsonify({"objectPath": storage.save_upload(object_id, data)})

    @app.route("/api/photos", methods=["PUT"], endpoint="register_photo")
    @json_errors("Failed to process photo")
    def register_photo():
        body = read_json()
        image_url = body.get("imageUrl") if isinstance(body, dict) else None
        if not image_url or not isinstance(image_url, str):
            return error_response("imageUrl is required", 400)
        return jsonify({"objectPath": storage.normalize_object_path(image_url)})

    @app.route("/objects/<path:object_path>", methods=["GET"], endpoint="download_object")
    @json_errors("Failed to serve object")
    def download_object(object_path: str):
        path = storage.open_object(OBJECT_PREFIX + object_path)
        return send_file(path)
