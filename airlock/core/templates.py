"""File templates written by ``airlock init``."""

CONFIG_TEMPLATE = """# airlock project configuration
name: {name}

# Image used for the sandbox. Set either image or build, not both.
# image: docker.io/library/ubuntu:24.04
build:
  context: .
  containerfile: ./Containerfile
  tag: {tag}

# Container engine: podman or docker. Autodetected when unset.
# engine: podman

# Host directories that back the sandbox HOME and cache.
home: ./.airlock/home
cache: ./.airlock/cache

# To reuse across projects, point these at shared host paths, e.g.:
# home: ~/.local/share/airlock/home
# cache: ~/.local/share/airlock/cache

# Working directory inside the sandbox; the image's WORKDIR when unset.
workdir: /workspace

# Extra bind mounts (mode is rw or ro)
# mounts:
#   - source: ~/.gitconfig
#     target: /home/ubuntu/.gitconfig
#     mode: ro

env:
  EXAMPLE_VAR: "hello"
"""

LOCAL_CONFIG_TEMPLATE = """# Local overrides for airlock.yaml. This file is not meant to be committed.
# Keys set here replace the ones in airlock.yaml; env entries are merged.
#
# engine: docker
# env:
#   EXAMPLE_VAR: "local value"
"""

CONTAINERFILE_TEMPLATE = """FROM ubuntu:24.04

ENV DEBIAN_FRONTEND=noninteractive

# Common development tools
RUN apt-get update && apt-get install -y --no-install-recommends \\
    ca-certificates \\
    curl \\
    git \\
    gnupg \\
    jq \\
    less \\
    openssh-client \\
    ripgrep \\
    build-essential \\
    python3 \\
    python3-pip \\
    nodejs \\
    npm \\
    bash \\
    tzdata \\
  && rm -rf /var/lib/apt/lists/*

# Base image ships an ubuntu user
ARG USERNAME=ubuntu

USER root
RUN mkdir -p /workspace && chown $USERNAME:$USERNAME /workspace

USER $USERNAME
ENV HOME=/home/$USERNAME
WORKDIR /workspace

# Keep the container running so you can exec into it
CMD ["sleep", "infinity"]
"""

GITIGNORE_ENTRY = ".airlock/"
