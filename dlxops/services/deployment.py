from typing import Iterable


def hosting_urls(project_id: str) -> dict:
    return {
        "hosting": f"https://{project_id}.web.app",
        "console": f"https://console.firebase.google.com/project/{project_id}/overview",
    }


def render_summary(project_id: str, items: Iterable[str]) -> str:
    urls = hosting_urls(project_id)
    lines = [
        "🚀 DEPLOYMENT SUMMARY",
        "",
        "🌐 DEPLOYMENT DETAILS:",
        f"• Project: {project_id}",
        f"• Hosting URL: {urls['hosting']}",
        f"• Console: {urls['console']}",
        "",
        "🎯 SHIPPED:",
    ]
    lines += [f"✅ {item}" for item in items]
    return "\n".join(lines)
