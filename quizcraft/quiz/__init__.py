"""
Quiz module for creating, editing and taking quizzes.

This module provides the REST endpoints for quiz CRUD and
for grading a finished quiz.
"""
from flask import Blueprint
from quizcraft.config import config

quiz_bp = Blueprint('quiz', __name__, url_prefix=config.API_PREFIX or '/api')

from quizcraft.quiz import routes  # Import quiz routes
