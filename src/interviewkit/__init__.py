"""interviewkit — step-based configuration workflow for AI interviewer agents."""

__version__ = "0.1.0-dev"
