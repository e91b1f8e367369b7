[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corokit"
version = "0.1.0"
description = "Coroutine synchronisation primitives, a task container and a non-blocking TCP client built on asyncio"
requires-python = ">=3.10"
dependencies = []
keywords = ["asyncio", "coroutines", "event", "latch", "task", "tcp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
corokit-demo = "corokit.demos:main"

[tool.hatch.build.targets.wheel]
packages = ["corokit"]

[tool.pytest.ini_options]
addopts = "-ra"
