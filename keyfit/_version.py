# file generated by setuptools-scm
# don't change, don't track in version control
__version__ = version = "0.1.0"
__version_tuple__ = version_tuple = (0, 1, 0)
