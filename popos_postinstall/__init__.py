"""
Pop!_OS Post-Install Configuration
----------------------------------

Updates a fresh Pop!_OS / Ubuntu desktop, installs a selected bundle of
applications (Gaming, Work, Sysadmin or All of the Above) and reboots.
"""

APP_NAME: str = "Pop!_OS Setup"
VERSION: str = "1.0.0"

__version__ = VERSION
