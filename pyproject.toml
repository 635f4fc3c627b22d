[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "onos_cli"
version = "0.1.0"
description = "Command-line tools for the ONOS topology, PCI and UE-NIB services"
requires-python = ">=3.10"
dependencies = []
keywords = ["onos", "ran", "topology", "pci", "uenib", "cli", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
onos-topo = "onos_cli.topo.cli:main"
onos-pci = "onos_cli.pci.cli:main"
onos-uenib = "onos_cli.uenib.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["onos_cli"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
