# s3client/transport.py
"""
HTTP transport for the minio client.

minio builds its own urllib3 pool when it is not given one. A custom pool is
only built when a TLS context or a proxy has to be attached; it starts from
the same settings minio uses for its default pool.
"""
import logging
import os
import ssl
import tempfile
from datetime import timedelta
from typing import Callable, List, Optional
from urllib.parse import quote, unquote

import certifi
import urllib3
from urllib3.exceptions import HTTPError
from urllib3.util import Retry, Timeout, make_headers, parse_url

from .errors import ClientConstructionError, InvalidSecretError
from .models import Secret

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = timedelta(minutes=5).seconds
DEFAULT_POOL_SIZE = 10

CA_CERT_KEY = 'ca.crt'
CLIENT_CERT_KEY = 'tls.crt'
CLIENT_KEY_KEY = 'tls.key'


def default_transport_options() -> dict:
    """
    Keyword arguments of minio's own default urllib3 pool.

    Raises:
        ClientConstructionError: If SSL_CERT_FILE points at a missing file
    """
    ca_certs = os.environ.get('SSL_CERT_FILE') or certifi.where()
    if not os.path.isfile(ca_certs):
        raise ClientConstructionError(
            f"failed to create default minio transport: CA bundle not found: {ca_certs}"
        )
    return {
        'timeout': Timeout(connect=DEFAULT_TIMEOUT, read=DEFAULT_TIMEOUT),
        'maxsize': DEFAULT_POOL_SIZE,
        'cert_reqs': 'CERT_REQUIRED',
        'ca_certs': ca_certs,
        'retries': Retry(
            total=5,
            backoff_factor=0.2,
            status_forcelist=[500, 502, 503, 504]
        ),
    }


def _with_tls_config(tls_config: ssl.SSLContext) -> Callable[[dict], None]:
    def apply(options: dict):
        # urllib3 loads ca_certs into, and sets cert_reqs on, whatever context
        # it is handed; leave both out so the caller's context stays untouched.
        options.pop('ca_certs', None)
        options.pop('cert_reqs', None)
        options['ssl_context'] = tls_config
    return apply


def _with_proxy_url(proxy_url: str) -> Callable[[dict], None]:
    def apply(options: dict):
        options['proxy_url'] = proxy_url
        auth = parse_url(proxy_url).auth
        if auth:
            options['proxy_headers'] = make_headers(proxy_basic_auth=unquote(auth))
    return apply


def build_http_client(
    secure: bool,
    tls_config: Optional[ssl.SSLContext] = None,
    proxy_url: Optional[str] = None
) -> Optional[urllib3.PoolManager]:
    """
    Build the urllib3 pool for a minio client.

    Args:
        secure: Whether the client talks HTTPS
        tls_config: TLS context, only attached when secure
        proxy_url: Proxy to route every request through

    Returns:
        A pool, or None when minio's default pool should be used

    Raises:
        ClientConstructionError: If the pool cannot be created
    """
    transport_opts: List[Callable[[dict], None]] = []

    if secure and tls_config is not None:
        transport_opts.append(_with_tls_config(tls_config))

    if proxy_url is not None:
        transport_opts.append(_with_proxy_url(proxy_url))

    if not transport_opts:
        return None

    options = default_transport_options()
    for opt in transport_opts:
        opt(options)

    try:
        if 'proxy_url' in options:
            return urllib3.ProxyManager(options.pop('proxy_url'), **options)
        return urllib3.PoolManager(**options)
    except (HTTPError, ValueError) as e:
        raise ClientConstructionError(f"failed to create default minio transport: {e}") from e


def tls_config_from_secret(secret: Secret) -> ssl.SSLContext:
    """
    Build a TLS context from a certificate secret.

    The secret carries a CA bundle under 'ca.crt', a client key pair under
    'tls.crt' and 'tls.key', or both.

    Raises:
        InvalidSecretError: If the secret holds no usable certificate data
    """
    ca = secret.get(CA_CERT_KEY)
    cert = secret.get(CLIENT_CERT_KEY)
    key = secret.get(CLIENT_KEY_KEY)

    if not ca and not cert and not key:
        raise InvalidSecretError(
            f"invalid '{secret.name}' secret data: requires '{CA_CERT_KEY}' "
            f"or '{CLIENT_CERT_KEY}' and '{CLIENT_KEY_KEY}'"
        )
    if bool(cert) != bool(key):
        raise InvalidSecretError(
            f"invalid '{secret.name}' secret data: '{CLIENT_CERT_KEY}' and "
            f"'{CLIENT_KEY_KEY}' must be set together"
        )

    try:
        if ca:
            context = ssl.create_default_context(cadata=ca)
        else:
            context = ssl.create_default_context(cafile=certifi.where())

        if cert:
            # ssl can only load a key pair from disk
            with tempfile.TemporaryDirectory() as tmp:
                cert_path = os.path.join(tmp, CLIENT_CERT_KEY)
                key_path = os.path.join(tmp, CLIENT_KEY_KEY)
                with open(cert_path, 'w') as f:
                    f.write(cert)
                with open(key_path, 'w') as f:
                    f.write(key)
                context.load_cert_chain(cert_path, key_path)
    except ssl.SSLError as e:
        raise InvalidSecretError(f"invalid '{secret.name}' secret data: {e}") from e

    logger.debug(f"Built TLS context from secret '{secret.name}' (client cert: {bool(cert)})")
    return context


def proxy_url_from_secret(secret: Secret) -> str:
    """
    Build a proxy URL from a proxy secret.

    The secret carries 'address' and, optionally, 'username' with 'password'.

    Raises:
        InvalidSecretError: If 'address' is missing or only one credential is set
    """
    address = secret.get('address')
    if not address:
        raise InvalidSecretError(
            f"invalid '{secret.name}' secret data for proxy: key 'address' not found"
        )

    username = secret.get('username') or ''
    password = secret.get('password') or ''
    if bool(username) != bool(password):
        raise InvalidSecretError(
            f"invalid '{secret.name}' secret data for proxy: "
            f"'username' and 'password' must be set together"
        )

    url = parse_url(address)
    if not url.scheme or not url.host:
        raise InvalidSecretError(
            f"invalid '{secret.name}' secret data for proxy: malformed address '{address}'"
        )
    if not username:
        return url.url

    auth = f"{quote(username, safe='')}:{quote(password, safe='')}"
    return url._replace(auth=auth).url
