"""
Editor for Apple privacy manifest (PrivacyInfo.xcprivacy) files.
"""

__version__ = "0.4.0"
