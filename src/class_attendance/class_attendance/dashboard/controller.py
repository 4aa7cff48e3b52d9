from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @json_errors("Failed to fetch dashboard stats")
    def dashboard_stats():
        return jsonify(container.dashboard_service.get_stats().to_json())
