"""Main settings file.

Settings are split into components, see ``server/settings/components``.
Components are included in order, later ones may rely on earlier ones.
"""

from split_settings.tools import include

_base_settings = (
    'components/common.py',
    'components/logging.py',
    'components/storages.py',
    'components/authentication.py',
    'components/server.py',
)

include(*_base_settings)
