"""Application package for the campus registry backend.

This package exposes the service, repository and model modules used by
the FastAPI application that manages faculties and their students.
Individual modules contain the concrete implementations.
"""
