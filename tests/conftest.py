"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from aksctl.core.config import ClusterConfig


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user config never leaks in."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("NAMESPACE", raising=False)
    return config_home


@pytest.fixture
def cluster_config() -> ClusterConfig:
    """Default cluster configuration."""
    return ClusterConfig()


@pytest.fixture
def good_deployment() -> str:
    """Deployment manifest that satisfies every check."""
    return """apiVersion: apps/v1
kind: Deployment
metadata:
  name: myapp
  labels:
    app: myapp
spec:
  replicas: 2
  selector:
    matchLabels:
      app: myapp
  template:
    metadata:
      labels:
        app: myapp
      annotations:
        sidecar.istio.io/inject: "true"
    spec:
      securityContext:
        runAsNonRoot: true
        runAsUser: 1000
      containers:
        - name: myapp
          image: gabby.azurecr.io/myapp:v1.2.3
          ports:
            - containerPort: 8080
          resources:
            requests:
              cpu: 100m
              memory: 128Mi
            limits:
              cpu: 500m
              memory: 256Mi
          livenessProbe:
            httpGet:
              path: /healthz
              port: 8080
          readinessProbe:
            httpGet:
              path: /ready
              port: 8080
"""


@pytest.fixture
def root_deployment(good_deployment: str) -> str:
    """Deployment manifest without runAsNonRoot."""
    return good_deployment.replace("        runAsNonRoot: true\n", "")


@pytest.fixture
def good_virtual_service() -> str:
    """VirtualService bound to the shared gateway."""
    return """apiVersion: networking.istio.io/v1beta1
kind: VirtualService
metadata:
  name: myapp
spec:
  hosts:
    - myapp.cat-herding.net
  gateways:
    - aks-istio-ingress/cat-herding-gateway
  http:
    - route:
        - destination:
            host: myapp
            port:
              number: 8080
"""


@pytest.fixture
def manifest_dir(tmp_path: Path, good_deployment: str, good_virtual_service: str) -> Path:
    """Directory with a clean Deployment and VirtualService."""
    directory = tmp_path / "k8s"
    directory.mkdir()
    (directory / "deployment.yaml").write_text(good_deployment)
    (directory / "virtualservice.yml").write_text(good_virtual_service)
    return directory
