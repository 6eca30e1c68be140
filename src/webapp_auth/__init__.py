"""
Web App Authentication Sample.

Provisions four Azure web apps under one App Service plan and wires each one
to a different identity provider login:
    - Active Directory login for app 1
    - Facebook login for app 2
    - Google login for app 3
    - Microsoft account login for app 4

All resources live in a single, randomly named resource group that is
deleted again at the end of the run.
"""

__version__ = "1.0.0"
