"""LessonPath API."""
