[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ringmaster"
version = "1.0"
description = "Small Linux networking and I/O utilities: sockets, pollers, timers, memory maps and wire serialization"
requires-python = ">=3.13"
dependencies = []
keywords = ["networking", "sockets", "epoll", "poll", "timerfd", "mmap", "serialization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ringmaster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
