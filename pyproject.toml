[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yarr"
version = "2.4"
description = "JSON Feed parsing, HTML sanitizing and readable-content extraction for news readers"
requires-python = ">=3.10"
keywords = ["jsonfeed", "feed", "readability", "sanitizer", "html", "xml", "dates"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
    "Topic :: Text Processing :: Markup :: HTML",
    "Topic :: Text Processing :: Markup :: XML",
]
dependencies = [
    "lxml",
    "html5lib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["yarr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
