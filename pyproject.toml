[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "difiko"
version = "0.1.5"
description = "Building blocks for reviewing local git branch diffs: diff model, file tree, word diff, review state, theming and styled diff lines"
requires-python = ">=3.10"
keywords = ["git", "diff", "review", "pull-request", "terminal", "word-diff", "blame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]
dependencies = [
    "platformdirs",
    "pygments",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["difiko"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
