from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.http import json_errors, read_json
from ..container import Container
from .service import EXPORT_FIELDS, ExportData


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    def _write_csv(data: ExportData):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS, quoting=csv.QUOTE_ALL)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={data.filename}"},
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @json_errors("Failed to fetch attendance records")
    def list_attendance():
        return jsonify([d.to_json() for d in attendance.list_records(request.args.to_dict())])

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="export_attendance_csv")
    @json_errors("Failed to export attendance records")
    def export_attendance_csv():
        return _write_csv(attendance.build_export(request.args.to_dict()))

    @app.route("/api/sessions/<int:session_id>/attendance", methods=["GET"], endpoint="list_session_attendance")
    @json_errors("Failed to fetch session attendance")
    def list_session_attendance(session_id: int):
        return jsonify([r.to_json() for r in attendance.list_for_session(session_id)])

    @app.route("/api/attendance", methods=["POST"], endpoint="create_attendance")
    @json_errors("Failed to create attendance record")
    def create_attendance():
        return jsonify(attendance.record(read_json()).to_json()), 201

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="bulk_attendance")
    @json_errors("Failed to create attendance records")
    def bulk_attendance():
        saved = attendance.replace_for_session(read_json())
        return jsonify([r.to_json() for r in saved]), 201
