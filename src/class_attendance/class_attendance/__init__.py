"""Class attendance package.

Organized by feature modules (students, sessions, attendance, dashboard, storage)
with a thin Flask controller layer over service/repository layers.
"""
