# backend/mathnotes/api/deps.py
from fastapi import Request

from ..services.notebook import NotebookService
from ..services.recognition import RecognitionService


def get_notebook(request: Request) -> NotebookService:
    return request.app.state.notebook


def get_recognition_service(request: Request) -> RecognitionService:
    return request.app.state.recognition
