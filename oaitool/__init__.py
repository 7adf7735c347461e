"""oaitool - command line client for the OpenShift Assisted Installer API."""

__version__ = "0.1.0"
