"""Development entrypoint delegating to the application package."""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from mentor_api.main import app  # noqa: E402


if __name__ == "__main__":
    settings = app.config["MENTOR_SETTINGS"]
    print(f"Server running on http://localhost:{settings.port}")
    print(f"Environment: {settings.environment}")
    print(f"AI API Key: {'Configured' if settings.openai_api_key else 'Missing'}")
    app.run(host="0.0.0.0", port=settings.port, debug=settings.is_development)
