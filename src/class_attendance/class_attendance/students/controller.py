from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_errors, read_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    students = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @json_errors("Failed to fetch students")
    def list_students():
        rows = students.list_students(search=request.args.get("q"))
        return jsonify([s.to_json() for s in rows])

    @app.route("/api/students/stats", methods=["GET"], endpoint="list_student_stats")
    @json_errors("Failed to fetch student stats")
    def list_student_stats():
        return jsonify([s.to_json() for s in students.list_student_stats()])

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    @json_errors("Failed to fetch student")
    def get_student(student_id: int):
        return jsonify(students.get_student(student_id).to_json())

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @json_errors("Failed to create student")
    def create_student():
        student = students.create_student(read_json())
        return jsonify(student.to_json()), 201

    @app.route("/api/students/<int:student_id>", methods=["PATCH"], endpoint="update_student")
    @json_errors("Failed to update student")
    def update_student(student_id: int):
        return jsonify(students.update_student(student_id, read_json()).to_json())

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @json_errors("Failed to delete student")
    def delete_student(student_id: int):
        students.delete_student(student_id)
        return "", 204
