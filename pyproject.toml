[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "portfolioapi"
version = "0.1.0"
description = "HTTP API serving customer product portfolios from MongoDB with a Redis cache and a seed loader"
requires-python = ">=3.10"
keywords = ["portfolio", "api", "flask", "mongodb", "redis", "pagination", "cache"]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "flask",
    "pymongo",
    "redis",
    "python-dotenv",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
portfolioapi = "portfolioapi.app:main"

[tool.hatch.build.targets.wheel]
packages = ["portfolioapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
