from enum import Enum


class ToolType(str, Enum):
    """Access level of a tool, used for read-only and dynamic-API filtering"""
    READ = "read"
    WRITE = "write"
    ALL_API = "all_api"


class ToolMode(str, Enum):
    """Which family of tools the toolkit exposes"""
    API = "api"
    APPS = "apps"
    ATP = "atp"
