"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base for errors outside the domain and adapters."""


class ConfigurationError(UtilError):
    """A production provider was built without its credentials.

    Raised at container resolution time, e.g. when `AUTH__FIREBASE_PROJECT_ID`
    or the `MEDIA__*` Cloudinary keys are unset.
    """
