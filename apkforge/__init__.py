"""
APKForge: mobile source tree to Android-package-shaped archive converter.

This system classifies an uploaded mobile project (React Native, Flutter,
native Android, Cordova or a generic web-style app), fills in missing
scaffolding files and packages the tree into a ZIP archive laid out like an
APK. No real compiler, signer or dependency installer is ever invoked.
"""

__version__ = "1.0.0"
__author__ = "APKForge Team"
