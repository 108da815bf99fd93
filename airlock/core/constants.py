"""Constants used throughout the Airlock application."""


# Configuration files
CONFIG_FILE_NAMES = ["airlock.yaml", "airlock.yml"]
DATA_DIR_NAME = ".airlock"
LOCAL_CONFIG_FILE_NAME = "airlock.local.yaml"
DEFAULT_HOME_DIR = "./.airlock/home"
DEFAULT_CACHE_DIR = "./.airlock/cache"

# Image source defaults
CONTAINERFILE_NAME = "Containerfile"
# Probed in order when neither image nor build is configured: (context, containerfile)
CONTAINERFILE_CANDIDATES = [
    (".", "Containerfile"),
    ("./env", "./env/Containerfile"),
]
DEFAULT_IMAGE = "docker.io/library/ubuntu:24.04"
KEEPALIVE_COMMAND = ["sleep", "infinity"]
IMAGE_TAG_PREFIX = "airlock"

# Sandbox layout
DEFAULT_WORKDIR = "/workspace"
DEFAULT_USER = "1000"
ROOT_HOME = "/root"
HOME_PARENT = "/home"
HOSTNAME = "airlock"
LOGIN_SHELL = ["bash", "-l"]

# Container naming
CONTAINER_PREFIX = "airlock-"

# Host state directories are private to the invoking user
STATE_DIR_MODE = 0o700

# Mount modes and SELinux relabel option appended to bind mounts
MOUNT_MODES = ("rw", "ro")
DEFAULT_MOUNT_MODE = "rw"
RELABEL_OPTION = "Z"
