"""Bearer token verification settings.

Tokens are issued by the authorization service and signed with its
RSA private key, this service only needs the public half.
"""

from typing import Final

from server.settings.components import BASE_DIR, config

# Inline PEM takes precedence over the key file
JWT_PUBLIC_KEY = config('JWT_PUBLIC_KEY', default='')
JWT_PUBLIC_KEY_PATH = config(
    'JWT_PUBLIC_KEY_PATH',
    default=str(BASE_DIR.joinpath('config', 'public.pub')),
)

# Only the RSA PKCS#1 v1.5 family is accepted
JWT_ALGORITHMS: Final[tuple[str, ...]] = ('RS256', 'RS384', 'RS512')
