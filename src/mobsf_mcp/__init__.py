"""MobSF MCP server: scan APK/IPA binaries through a MobSF backend."""

__version__ = "1.0.0"
