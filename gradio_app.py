# gradio_app.py
"""
Gradio UI for the User Management API with:
 - backend status banner (Checking... / Online / Offline) + manual re-check
 - home tab with welcome text and feature list
 - users tab: table, search, stats (total, average age, top cities),
   create form, delete by id, success / error banner
 - dashboard tab: server-side numbers + top cities bar chart
 - debug tab: raw /api/health response or error

Run:
 python gradio_app.py
"""

import io
import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

import gradio as gr
import matplotlib.pyplot as plt
from dotenv import load_dotenv
from PIL import Image

from user_api.client import DEFAULT_BACKEND_URL, ApiClient, ApiError
from user_api.services.stats_service import city_counts, compute_stats, filter_users

load_dotenv()

# ----------------- Config -----------------
BACKEND_URL = os.getenv("BACKEND_URL", DEFAULT_BACKEND_URL)
WELCOME_MESSAGE = "Welcome to User Management System"
FEATURES = [
    "User Registration & Management",
    "CRUD Operations for User Management",
    "Dashboard with live statistics",
    "MySQL Database Integration",
    "Docker Containerization",
    "CI/CD Pipeline",
]
TABLE_HEADERS = ["id", "username", "email", "first_name", "last_name", "age", "city", "created_at"]


def get_client(backend_url: Optional[str]) -> ApiClient:
    """One client (and one requests session) per backend URL, reused across events."""
    return _client_for((backend_url or BACKEND_URL).strip().rstrip("/"))


@lru_cache(maxsize=8)
def _client_for(base_url: str) -> ApiClient:
    return ApiClient(base_url)


def describe_error(e: Exception) -> str:
    if isinstance(e, ApiError):
        return e.message
    return str(e)


# ----------------- UI helpers -----------------
def users_to_rows(users: List[Dict[str, Any]]) -> List[List[Any]]:
    return [[u.get(h) if u.get(h) is not None else "" for h in TABLE_HEADERS] for u in users]


def format_stats(users: List[Dict[str, Any]]) -> str:
    stats = compute_stats(users)
    cities = ", ".join(stats["topCities"]) if stats["topCities"] else "-"
    return (
        f"**Total users:** {stats['totalUsers']}  |  "
        f"**Average age:** {stats['averageAge']}  |  "
        f"**Top cities:** {cities}"
    )


def format_dashboard(data: Dict[str, Any]) -> str:
    avg = data.get("averageAge")
    cities = data.get("topCities") or []
    return "\n".join([
        f"- **Total users:** {data.get('totalUsers', 0)}",
        f"- **Average age:** {avg if avg is not None else 'n/a'}",
        f"- **Top cities:** {', '.join(cities) if cities else 'n/a'}",
        f"- **New today:** {data.get('newToday', 0)}",
        f"- _Updated {data.get('timestamp', '')}_",
    ])


def plot_city_chart_image(counts: Dict[str, int], limit: int = 10):
    """Produce PNG bytes of a bar chart of users per city (most common first)."""
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]
    fig, ax = plt.subplots(figsize=(6, 3.5))
    if ordered:
        ax.bar([c for c, _ in ordered], [n for _, n in ordered])
    else:
        ax.text(0.5, 0.5, "No city data", ha="center", va="center", transform=ax.transAxes)
    ax.set_xlabel("City")
    ax.set_ylabel("Users")
    ax.set_title("Users per city")
    ax.grid(True, axis="y", linestyle=":", linewidth=0.5)
    plt.setp(ax.get_xticklabels(), rotation=30, ha="right")
    plt.tight_layout()
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=120)
    plt.close(fig)
    buf.seek(0)
    return buf.read()


# ----------------- App functions -----------------
def check_backend(backend_url: str) -> str:
    try:
        get_client(backend_url).check_health()
    except Exception:
        return "Offline"
    return "Online"


def load_users(backend_url: str, search: str = ""):
    """Returns (table_rows, stats_markdown, banner, users_state)."""
    try:
        res = get_client(backend_url).get_users()
    except Exception as e:
        return [], format_stats([]), f"Failed to load users: {describe_error(e)}", []
    users = res.get("data") or []
    return users_to_rows(filter_users(users, search)), format_stats(users), "", users


def search_users(users_state: List[Dict[str, Any]], search: str):
    return users_to_rows(filter_users(users_state or [], search))


def create_user(backend_url: str, users_state, search: str,
                username: str, email: str, first_name: str, last_name: str,
                age: Optional[float], city: str):
    """
    Create -> prepend to the local list -> recompute stats.
    Returns (table_rows, stats, banner, users_state, *form_fields)
    """
    users = list(users_state or [])
    form = (username, email, first_name, last_name, age, city)
    if not (username or "").strip() or not (email or "").strip():
        return (search_users(users, search), format_stats(users),
                "Username and email are required", users, *form)

    payload = {
        "username": username.strip(),
        "email": email.strip(),
        "first_name": first_name or None,
        "last_name": last_name or None,
        "age": int(age) if age is not None else None,
        "city": city or None,
    }
    try:
        res = get_client(backend_url).create_user(payload)
    except Exception as e:
        return (search_users(users, search), format_stats(users),
                describe_error(e) or "Failed to create user", users, *form)

    users.insert(0, res.get("data"))
    empty_form = ("", "", "", "", None, "")
    return (search_users(users, search), format_stats(users),
            "User created successfully!", users, *empty_form)


def delete_user(backend_url: str, users_state, search: str, user_id: Optional[float]):
    """Returns (table_rows, stats, banner, users_state)."""
    users = list(users_state or [])
    if user_id is None:
        return search_users(users, search), format_stats(users), "Enter a user id", users
    uid = int(user_id)
    try:
        get_client(backend_url).delete_user(uid)
    except Exception as e:
        return (search_users(users, search), format_stats(users),
                f"Failed to delete user: {describe_error(e)}", users)
    users = [u for u in users if u.get("id") != uid]
    return search_users(users, search), format_stats(users), "User deleted successfully", users


def load_dashboard(backend_url: str):
    """Returns (summary_markdown, PIL.Image or None)."""
    client = get_client(backend_url)
    try:
        data = client.get_dashboard().get("data") or {}
    except Exception as e:
        return f"Failed to load dashboard: {describe_error(e)}", None
    try:
        users = client.get_users().get("data") or []
        img_bytes = plot_city_chart_image(city_counts(users))
        img = Image.open(io.BytesIO(img_bytes)).convert("RGB")
    except Exception as e:
        return format_dashboard(data) + f"\n\nChart unavailable: {describe_error(e)}", None
    return format_dashboard(data), img


def test_api(backend_url: str):
    """Returns (response_json, error_text) for the debug tab."""
    try:
        return get_client(backend_url).check_health(), ""
    except ApiError as e:
        return e.payload, f"HTTP {e.status_code}: {e.message}"
    except Exception as e:
        return None, str(e)


# ----------------- Build Gradio UI -----------------
def build_ui() -> gr.Blocks:
    with gr.Blocks(title="User Management") as demo:
        gr.Markdown("## User Management")

        with gr.Row():
            backend_url = gr.Textbox(label="Backend URL", value=BACKEND_URL, scale=3)
            backend_status = gr.Textbox(label="Backend status", value="Checking...", interactive=False, scale=1)
            recheck_btn = gr.Button("Re-check backend", scale=1)

        users_state = gr.State(value=[])

        with gr.Tab("Home"):
            gr.Markdown(f"### {WELCOME_MESSAGE}")
            home_status = gr.Textbox(label="Backend", value="Checking...", interactive=False)
            gr.Markdown("\n".join(f"- {f}" for f in FEATURES))

        with gr.Tab("Users"):
            banner = gr.Textbox(label="Status", interactive=False)
            stats_md = gr.Markdown(format_stats([]))
            search_box = gr.Textbox(label="Search", placeholder="username, email, name or city")
            users_table = gr.Dataframe(headers=TABLE_HEADERS, interactive=False, wrap=True)
            refresh_btn = gr.Button("Refresh")

            with gr.Accordion("Add user", open=True):
                with gr.Row():
                    username = gr.Textbox(label="Username *")
                    email = gr.Textbox(label="Email *")
                with gr.Row():
                    first_name = gr.Textbox(label="First name")
                    last_name = gr.Textbox(label="Last name")
                with gr.Row():
                    age = gr.Number(label="Age", precision=0)
                    city = gr.Textbox(label="City")
                create_btn = gr.Button("Create user", variant="primary")

            with gr.Row():
                delete_id = gr.Number(label="User id to delete", precision=0)
                delete_btn = gr.Button("Delete user", variant="stop")

        with gr.Tab("Dashboard"):
            dashboard_md = gr.Markdown("No data")
            city_chart = gr.Image(label="Users per city", type="pil", interactive=False)
            dashboard_btn = gr.Button("Refresh dashboard")

        with gr.Tab("Debug"):
            debug_btn = gr.Button("Test API connection")
            debug_response = gr.JSON(label="Response")
            debug_error = gr.Textbox(label="Error", interactive=False)

        # Wiring
        user_outputs = [users_table, stats_md, banner, users_state]
        form_fields = [username, email, first_name, last_name, age, city]

        recheck_btn.click(fn=check_backend, inputs=[backend_url], outputs=[backend_status])
        recheck_btn.click(fn=check_backend, inputs=[backend_url], outputs=[home_status])
        refresh_btn.click(fn=load_users, inputs=[backend_url, search_box], outputs=user_outputs)
        search_box.change(fn=search_users, inputs=[users_state, search_box], outputs=[users_table])
        create_btn.click(fn=create_user, inputs=[backend_url, users_state, search_box, *form_fields],
                         outputs=user_outputs + form_fields)
        delete_btn.click(fn=delete_user, inputs=[backend_url, users_state, search_box, delete_id],
                         outputs=user_outputs)
        dashboard_btn.click(fn=load_dashboard, inputs=[backend_url], outputs=[dashboard_md, city_chart])
        debug_btn.click(fn=test_api, inputs=[backend_url], outputs=[debug_response, debug_error])

        demo.load(fn=check_backend, inputs=[backend_url], outputs=[backend_status])
        demo.load(fn=check_backend, inputs=[backend_url], outputs=[home_status])
        demo.load(fn=load_users, inputs=[backend_url, search_box], outputs=user_outputs)
        demo.load(fn=load_dashboard, inputs=[backend_url], outputs=[dashboard_md, city_chart])

    return demo


if __name__ == "__main__":
    build_ui().launch(share=False, inbrowser=True)
