from importlib.metadata import version as _get_version, PackageNotFoundError

try:
    version = _get_version('natspline')
except PackageNotFoundError:
    # package is not installed
    version = "ersion unknown"
