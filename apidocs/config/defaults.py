"""Built-in catalogs for Kubernetes-style API types.

The external link table points well-known ``k8s.io/api`` and
``k8s.io/apimachinery`` types at the upstream API reference. Entries can be
extended or overridden from a YAML file, see :func:`apidocs.config.load_config`.
"""

from __future__ import annotations

from .models import GeneratorConfig, WellKnownField, WellKnownType

DEFAULT_TITLE = "API Docs"
K8S_API_REFERENCE = "https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.27/"

DEFAULT_EXTERNAL_LINKS: dict[str, str] = {
    "metav1.ObjectMeta": f"{K8S_API_REFERENCE}#objectmeta-v1-meta",
    "metav1.ListMeta": f"{K8S_API_REFERENCE}#listmeta-v1-meta",
    "metav1.LabelSelector": f"{K8S_API_REFERENCE}#labelselector-v1-meta",
    "v1.ResourceRequirements": f"{K8S_API_REFERENCE}#resourcerequirements-v1-core",
    "v1.LocalObjectReference": f"{K8S_API_REFERENCE}#localobjectreference-v1-core",
    "v1.SecretKeySelector": f"{K8S_API_REFERENCE}#secretkeyselector-v1-core",
    "v1.PersistentVolumeClaim": f"{K8S_API_REFERENCE}#persistentvolumeclaim-v1-core",
    "v1.EmptyDirVolumeSource": f"{K8S_API_REFERENCE}#emptydirvolumesource-v1-core",
    "v1.Volume": f"{K8S_API_REFERENCE}#volume-v1-core",
    "v1.VolumeMount": f"{K8S_API_REFERENCE}#volumemount-v1-core",
    "v1.Affinity": f"{K8S_API_REFERENCE}#affinity-v1-core",
    "v1.Toleration": f"{K8S_API_REFERENCE}#toleration-v1-core",
    "v1.Container": f"{K8S_API_REFERENCE}#container-v1-core",
    "v1.EnvVar": f"{K8S_API_REFERENCE}#envvar-v1-core",
    "v1.PersistentVolumeClaimSpec": f"{K8S_API_REFERENCE}#persistentvolumeclaimspec-v1-core",
    "v1.PodSecurityContext": f"{K8S_API_REFERENCE}#podsecuritycontext-v1-core",
    "v1.DNSPolicy": f"{K8S_API_REFERENCE}#pod-v1-core",
    "v1.TopologySpreadConstraint": "https://kubernetes.io/docs/concepts/workloads/pods/pod-topology-spread-constraints/",
    "appsv1.StatefulSetUpdateStrategyType": f"{K8S_API_REFERENCE}#statefulsetupdatestrategy-v1-apps",
    "v1.PersistentVolumeClaimStatus": f"{K8S_API_REFERENCE}#persistentvolumeclaimstatus-v1-core",
    "v1.PullPolicy": "https://kubernetes.io/docs/concepts/containers/images#updating-images",
    "appsv1.DeploymentStrategyType": f"{K8S_API_REFERENCE}#deploymentstrategy-v1-apps",
    "appsv1.RollingUpdateDeployment": f"{K8S_API_REFERENCE}#rollingupdatedeployment-v1-apps",
    "v12.IngressRule": f"{K8S_API_REFERENCE}#ingressrule-v1-networking-k8s-io",
    "v12.IngressTLS": f"{K8S_API_REFERENCE}#ingresstls-v1-networking-k8s-io",
    "v1.Probe": f"{K8S_API_REFERENCE}#probe-v1-core",
}

DEFAULT_SKIP_EMBEDS: tuple[str, ...] = ("metav1.TypeMeta",)


def _default_well_known() -> dict[str, WellKnownType]:
    return {
        "v1.LocalObjectReference": WellKnownType(
            name="v1.LocalObjectReference",
            doc="LocalObjectReference contains enough information to let you "
            "locate the referenced object inside the same namespace.",
            fields=[
                WellKnownField(
                    name="name",
                    type="string",
                    doc="Name of the referent.",
                    required=True,
                )
            ],
        )
    }


def default_config() -> GeneratorConfig:
    """Return a fresh configuration holding only the built-in catalogs."""
    return GeneratorConfig(
        title=DEFAULT_TITLE,
        external_links=dict(DEFAULT_EXTERNAL_LINKS),
        well_known=_default_well_known(),
        skip_embeds=list(DEFAULT_SKIP_EMBEDS),
    )


__all__ = [
    "DEFAULT_EXTERNAL_LINKS",
    "DEFAULT_SKIP_EMBEDS",
    "DEFAULT_TITLE",
    "K8S_API_REFERENCE",
    "default_config",
]
