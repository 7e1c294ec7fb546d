import os

from importlib import import_module

from . import default_settings

SETTINGS_MODULE_ENVIRONMENT = "BOSH_LADLE_SETTINGS"


class Settings:
    """
    Holds upper-case settings values, read from default_settings and then
    overlaid by any further modules or keyword overrides.

    Lower-case attributes are ordinary instance attributes, so
    ``settings.attributes`` can be patched as a whole in tests.
    """

    def __init__(self, *modules, **overrides):
        """
        :param modules: module objects or dotted import paths, applied in order
        :param overrides: upper-case names applied last
        """
        self.attributes = {}
        for module in (default_settings,) + modules:
            self.load_module(module)
        self.update(overrides)

    @classmethod
    def from_environ(cls, environ=None):
        """
        Builds settings, overlaying the module named by BOSH_LADLE_SETTINGS
        when that variable is set.
        """
        environ = os.environ if environ is None else environ
        module = environ.get(SETTINGS_MODULE_ENVIRONMENT)
        return cls(module) if module else cls()

    def __getattr__(self, name):
        try:
            return self.__dict__["attributes"][name]
        except KeyError:
            raise AttributeError(name)

    def load_module(self, module):
        if isinstance(module, str):
            module = import_module(module)
        self.update(
            {key: getattr(module, key) for key in dir(module) if key.isupper()}
        )

    def update(self, values):
        for key, value in values.items():
            if key.isupper():
                self.attributes[key] = value

    def get(self, key, default_value=None):
        return self.attributes.get(key, default_value)


SETTINGS = Settings.from_environ()
