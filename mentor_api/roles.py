"""Static catalog of the cybersecurity job roles learners can study."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

DEFAULT_ROLE_LABEL = "General Cybersecurity"


@dataclass(frozen=True)
class JobRole:
    id: str
    name: str
    description: str
    category: str
    color: str
    icon: str
    concepts: int
    scenarios: int
    difficulty: str
    skills: Tuple[str, ...]
    certifications: Tuple[str, ...]

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["skills"] = list(self.skills)
        payload["certifications"] = list(self.certifications)
        return payload


JOB_ROLES: Tuple[JobRole, ...] = (
    JobRole(
        id="red-team-operator",
        name="Red Team Operator",
        description="Master advanced persistent threats, social engineering, and full-spectrum attack simulation methodologies.",
        category="OFFENSIVE",
        color="red",
        icon="fas fa-user-ninja",
        concepts=156,
        scenarios=89,
        difficulty="Advanced",
        skills=("Social Engineering", "APT Simulation", "Evasion Techniques", "C2 Operations"),
        certifications=("OSCP", "OSCE", "GPEN", "CRT"),
    ),
    JobRole(
        id="soc-analyst",
        name="SOC Analyst",
        description="Develop skills in threat detection, incident response, and security monitoring in enterprise environments.",
        category="DEFENSIVE",
        color="blue",
        icon="fas fa-shield-alt",
        concepts=142,
        scenarios=76,
        difficulty="Intermediate",
        skills=("SIEM Analysis", "Threat Hunting", "Log Analysis", "Alert Triage"),
        certifications=("GCIH", "GSOC", "GCFA", "CySA+"),
    ),
    JobRole(
        id="incident-responder",
        name="Incident Responder",
        description="Learn rapid threat containment, forensic analysis, and crisis management in high-pressure scenarios.",
        category="RESPONSE",
        color="yellow",
        icon="fas fa-fire-extinguisher",
        concepts=98,
        scenarios=54,
        difficulty="Advanced",
        skills=("Digital Forensics", "Malware Analysis", "Crisis Management", "Evidence Collection"),
        certifications=("GCIH", "GCFA", "GNFA", "CHFI"),
    ),
    JobRole(
        id="cloud-security-engineer",
        name="Cloud Security Engineer",
        description="Secure AWS, Azure, and GCP environments with zero-trust architecture and DevSecOps practices.",
        category="CLOUD",
        color="purple",
        icon="fas fa-cloud-upload-alt",
        concepts=134,
        scenarios=67,
        difficulty="Advanced",
        skills=("Zero-Trust Architecture", "DevSecOps", "Cloud Compliance", "Container Security"),
        certifications=("CCSP", "AWS Security", "Azure Security", "CISSP"),
    ),
    JobRole(
        id="malware-analyst",
        name="Malware Analyst",
        description="Reverse engineer malicious code, understand attack vectors, and develop countermeasures.",
        category="ANALYSIS",
        color="green",
        icon="fas fa-bug",
        concepts=89,
        scenarios=45,
        difficulty="Advanced",
        skills=("Reverse Engineering", "Dynamic Analysis", "Static Analysis", "Threat Intelligence"),
        certifications=("GREM", "GIAC", "OSEE", "CRT"),
    ),
    JobRole(
        id="compliance-specialist",
        name="Compliance Specialist",
        description="Navigate ISO 27001, SOC 2, GDPR, and other frameworks with practical implementation strategies.",
        category="GOVERNANCE",
        color="orange",
        icon="fas fa-clipboard-check",
        concepts=76,
        scenarios=32,
        difficulty="Intermediate",
        skills=("Risk Assessment", "Policy Development", "Audit Management", "Framework Implementation"),
        certifications=("CISSP", "CISA", "ISO 27001 LA", "CRISC"),
    ),
)

_ROLES_BY_ID = {role.id: role for role in JOB_ROLES}


def get_role_by_id(role_id: str) -> Optional[JobRole]:
    """Return the catalog entry for ``role_id`` if it exists."""
    return _ROLES_BY_ID.get(role_id)


def role_label(value: Any, default: str = DEFAULT_ROLE_LABEL) -> str:
    """Render a role id or free-form role name for use inside a prompt.

    Request bodies for the generators are not validated, so any JSON value may
    arrive here; non-strings are rendered with ``str``.
    """
    if value is None:
        return default
    text = value.strip() if isinstance(value, str) else str(value)
    if not text:
        return default
    role = get_role_by_id(text)
    return role.name if role else text
