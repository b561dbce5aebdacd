[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "people-api"
version = "1.0.0"
description = "HTTP service for managing people, enriched with age, gender and nationality looked up by first name."
requires-python = ">=3.10"
keywords = ["rest", "api", "people", "flask", "sqlalchemy", "postgres", "enrichment"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask>=3.0",
    "requests>=2.31",
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "responses>=0.24",
]

[project.scripts]
people-api = "people_api.server:main"

[tool.hatch.build.targets.wheel]
packages = ["people_api"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
