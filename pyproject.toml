[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pveguest"
version = "0.1.0"
description = "Helpers for describing and reconciling Proxmox VE guests: resource IDs, tags, SSH keys, clone sources, disks, networks and primary IP addresses"
requires-python = ">=3.10"
dependencies = []
keywords = ["proxmox", "pve", "lxc", "qemu", "cloud-init", "virtualization"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pveguest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
