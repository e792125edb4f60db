import base64
import dataclasses

import pytest

from s3client import Bucket, BucketProvider, Secret


BUCKET_MANIFEST = {
    "apiVersion": "source.toolkit.fluxcd.io/v1beta2",
    "kind": "Bucket",
    "metadata": {"name": "podinfo", "namespace": "flux-system"},
    "spec": {
        "bucketName": "podinfo",
        "endpoint": "s3.amazonaws.com",
        "region": "us-east-1",
        "provider": "aws",
        "prefix": "manifests/",
        "secretRef": {"name": "s3-creds"},
        "certSecretRef": {"name": "s3-ca"},
    },
}


def test_bucket_from_manifest():
    bucket = Bucket.from_dict(BUCKET_MANIFEST)

    assert bucket.name == "podinfo"
    assert bucket.namespace == "flux-system"
    assert bucket.bucket_name == "podinfo"
    assert bucket.endpoint == "s3.amazonaws.com"
    assert bucket.region == "us-east-1"
    assert bucket.provider is BucketProvider.AMAZON
    assert bucket.insecure is False
    assert bucket.prefix == "manifests/"
    assert bucket.secret_ref == "s3-creds"
    assert bucket.cert_secret_ref == "s3-ca"
    assert bucket.proxy_secret_ref is None


def test_bucket_defaults():
    bucket = Bucket.from_dict({"spec": {"endpoint": "minio:9000", "insecure": True}})

    assert bucket.provider is BucketProvider.GENERIC
    assert bucket.insecure is True
    assert bucket.region == ""
    assert bucket.secret_ref is None


def test_bucket_requires_endpoint():
    with pytest.raises(ValueError, match="endpoint"):
        Bucket.from_dict({"metadata": {"name": "x"}, "spec": {"bucketName": "x"}})


def test_bucket_rejects_unknown_provider():
    with pytest.raises(ValueError):
        Bucket.from_dict({"spec": {"endpoint": "minio:9000", "provider": "ibm"}})


def test_bucket_is_read_only():
    bucket = Bucket(endpoint="minio:9000")
    with pytest.raises(dataclasses.FrozenInstanceError):
        bucket.insecure = True


def test_bucket_to_dict_keeps_refs():
    doc = Bucket.from_dict(BUCKET_MANIFEST).to_dict()

    assert doc["spec"]["secretRef"] == {"name": "s3-creds"}
    assert doc["spec"]["provider"] == "aws"
    assert "proxySecretRef" not in doc["spec"]


def test_secret_from_manifest_decodes_data():
    secret = Secret.from_dict({
        "kind": "Secret",
        "metadata": {"name": "s3-creds"},
        "data": {
            "accesskey": base64.b64encode(b"AKIA").decode(),
            "secretkey": base64.b64encode(b"old").decode(),
        },
        "stringData": {"secretkey": "new"},
    })

    assert secret.name == "s3-creds"
    assert secret.data["accesskey"] == b"AKIA"
    assert secret.get("secretkey") == "new"
    assert secret.get("missing") is None


@pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
def test_bucket_rejects_non_boolean_insecure(value):
    with pytest.raises(ValueError, match="spec.insecure must be a boolean"):
        Bucket.from_dict({"spec": {"endpoint": "s3.example.com", "insecure": value}})
