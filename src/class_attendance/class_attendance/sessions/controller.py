from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_errors, read_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    sessions = container.session_service

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    @json_errors("Failed to fetch sessions")
    def list_sessions():
        return jsonify([s.to_json() for s in sessions.list_sessions()])

    @app.route("/api/sessions/<int:session_id>", methods=["GET"], endpoint="get_session")
    @json_errors("Failed to fetch session")
    def get_session(session_id: int):
        return jsonify(sessions.get_session(session_id).to_json())

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    @json_errors("Failed to create session")
    def create_session():
        session = sessions.create_session(read_json())
        return jsonify(session.to_json()), 201
