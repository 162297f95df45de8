import os

# Must be set before any server module is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["TMDB_API_KEY"] = "test-key"
