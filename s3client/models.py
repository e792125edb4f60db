# s3client/models.py
"""
Kubernetes-style configuration objects consumed by the bucket client.
Both can be built directly or from a parsed manifest dict.
"""
import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class BucketProvider(Enum):
    """Object storage provider of a bucket"""
    GENERIC = "generic"
    AMAZON = "aws"
    GOOGLE = "gcp"
    AZURE = "azure"


@dataclass(frozen=True)
class Bucket:
    """
    Read-only bucket descriptor.
    Mirrors the spec of a source-controller Bucket object.
    """
    endpoint: str
    bucket_name: str = ""
    name: str = ""
    namespace: str = "default"
    region: str = ""
    insecure: bool = False
    provider: BucketProvider = BucketProvider.GENERIC
    prefix: str = ""
    secret_ref: Optional[str] = None
    cert_secret_ref: Optional[str] = None
    proxy_secret_ref: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to a Bucket manifest"""
        spec = {
            'bucketName': self.bucket_name,
            'endpoint': self.endpoint,
            'insecure': self.insecure,
            'provider': self.provider.value,
        }
        if self.region:
            spec['region'] = self.region
        if self.prefix:
            spec['prefix'] = self.prefix
        for key, ref in (
            ('secretRef', self.secret_ref),
            ('certSecretRef', self.cert_secret_ref),
            ('proxySecretRef', self.proxy_secret_ref),
        ):
            if ref:
                spec[key] = {'name': ref}
        return {
            'kind': 'Bucket',
            'metadata': {'name': self.name, 'namespace': self.namespace},
            'spec': spec,
        }

    @staticmethod
    def from_dict(doc: dict) -> 'Bucket':
        """Create from a Bucket manifest"""
        metadata = doc.get('metadata') or {}
        spec = doc.get('spec') or {}
        if not spec.get('endpoint'):
            raise ValueError("Bucket manifest has no spec.endpoint")

        insecure = spec.get('insecure', False)
        if not isinstance(insecure, bool):
            raise ValueError("Bucket manifest spec.insecure must be a boolean")

        def ref(key):
            return (spec.get(key) or {}).get('name')

        return Bucket(
            name=metadata.get('name', ''),
            namespace=metadata.get('namespace', 'default'),
            bucket_name=spec.get('bucketName', ''),
            endpoint=spec['endpoint'],
            region=spec.get('region', ''),
            insecure=insecure,
            provider=BucketProvider(spec.get('provider', BucketProvider.GENERIC.value)),
            prefix=spec.get('prefix', ''),
            secret_ref=ref('secretRef'),
            cert_secret_ref=ref('certSecretRef'),
            proxy_secret_ref=ref('proxySecretRef'),
        )


@dataclass
class Secret:
    """Kubernetes Secret: a name plus raw byte values"""
    name: str
    data: Dict[str, bytes] = field(default_factory=dict)
    namespace: str = "default"

    def get(self, key: str) -> Optional[str]:
        """Decoded value of key, or None if absent"""
        value = self.data.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode('utf-8')
        return value

    @staticmethod
    def from_dict(doc: dict) -> 'Secret':
        """
        Create from a Secret manifest.

        Values under `data` are base64 encoded, values under `stringData`
        are plain text and win over `data` on key collisions.
        """
        metadata = doc.get('metadata') or {}
        data = {
            key: base64.b64decode(value)
            for key, value in (doc.get('data') or {}).items()
        }
        for key, value in (doc.get('stringData') or {}).items():
            data[key] = value.encode('utf-8')
        return Secret(
            name=metadata.get('name', ''),
            namespace=metadata.get('namespace', 'default'),
            data=data,
        )
