import os

import discord
from discord.ext import commands
from classroom.store import ClassroomStore
from config.defaults import MAX_GROUP_COUNT
from config.env import env_int
from config.env import parse_id_set
from config.env import parse_str_set
from misc.classroom_embeds import build_enrollment_embed
from misc.classroom_embeds import build_lab_panel_embed
from misc.classroom_embeds import build_lab_status_embed
from misc.classroom_embeds import build_student_status_embed
from misc.classroom_views import build_complete_lab_panel
from misc.classroom_views import build_join_group_panel
from misc.component_routes import route_component_interaction
from misc.discord_gates import channel_can_host_threads
from misc.discord_gates import channel_is_thread
from misc.discord_gates import classroom_for_channel
from misc.discord_text import send_chunked
from misc.invite_link import generate_invite_link
from misc.live_targets import ContextReplyTarget
from misc.live_update import start_live_update
from misc.live_update_settings import load_live_update_settings
from misc.runtime_wiring import wire_bot_runtime

BOT_NAME = "LabBot"

# =========================
# ENV
# =========================
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")

if not DISCORD_TOKEN:
    raise RuntimeError("Missing DISCORD_TOKEN env var")

DISCORD_APP_ID = env_int("DISCORD_APP_ID", 0, minimum=0)
COMMAND_PREFIX = os.getenv("LABBOT_COMMAND_PREFIX", "!").strip() or "!"
MAX_GROUPS = env_int("LABBOT_MAX_GROUPS", MAX_GROUP_COUNT, minimum=1, maximum=MAX_GROUP_COUNT)

OWNER_USER_IDS = parse_id_set(os.getenv("LABBOT_OWNER_USER_IDS"))
OWNER_USERNAMES = parse_str_set(os.getenv("LABBOT_OWNER_USERNAMES"))

# Live-update panel tuning lives in YAML so it can change without a deploy.
LIVE_UPDATES_PATH = os.getenv(
    "LABBOT_LIVE_UPDATES_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "config", "live_updates.yml"),
)
LIVE_SETTINGS, LIVE_SETTINGS_WARNING = load_live_update_settings(LIVE_UPDATES_PATH)

print(
    f"[CFG] prefix={COMMAND_PREFIX!r} max_groups={MAX_GROUPS} app_id={'set' if DISCORD_APP_ID else 'unset'} "
    f"owner_ids={len(OWNER_USER_IDS)} owner_names={len(OWNER_USERNAMES)}"
)
print(
    f"[CFG] live_updates interval_s={LIVE_SETTINGS.interval_seconds:g} "
    f"min_spacing_s={LIVE_SETTINGS.min_spacing_seconds:g} "
    f"default_min={LIVE_SETTINGS.default_minutes} max_min={LIVE_SETTINGS.max_minutes} "
    f"path={LIVE_UPDATES_PATH}"
)
if LIVE_SETTINGS_WARNING:
    print(f"[CFG] {LIVE_SETTINGS_WARNING}")


def user_is_owner(user: discord.abc.User) -> bool:
    uid = int(getattr(user, "id", 0) or 0)
    if uid and uid in OWNER_USER_IDS:
        return True
    if OWNER_USER_IDS:
        return False

    names = {
        str(getattr(user, "name", "") or "").strip().lower(),
        str(getattr(user, "global_name", "") or "").strip().lower(),
        str(getattr(user, "display_name", "") or "").strip().lower(),
    }
    return any(n in OWNER_USERNAMES for n in names if n)


def user_is_instructor(user: discord.abc.User) -> bool:
    if user_is_owner(user):
        return True
    perms = getattr(user, "guild_permissions", None)
    return bool(perms is not None and (perms.manage_threads or perms.administrator))


# =========================
# DISCORD BOT
# =========================
intents = discord.Intents.default()
intents.message_content = True

bot = commands.Bot(command_prefix=COMMAND_PREFIX, intents=intents)

# One store per process; classrooms live until restart.
classroom_store = ClassroomStore()

wire_bot_runtime(
    bot,
    store=classroom_store,
    send_chunked=send_chunked,
    user_is_owner=user_is_owner,
    user_is_instructor=user_is_instructor,
    channel_is_thread=channel_is_thread,
    channel_can_host_threads=channel_can_host_threads,
    classroom_for_channel=classroom_for_channel,
    route_component_interaction=route_component_interaction,
    live_settings=LIVE_SETTINGS,
    start_live_update=start_live_update,
    reply_target_factory=ContextReplyTarget,
    enrollment_embed=build_enrollment_embed,
    lab_status_embed=build_lab_status_embed,
    lab_panel_embed=build_lab_panel_embed,
    student_status_embed=build_student_status_embed,
    join_group_panel=build_join_group_panel,
    complete_lab_panel=build_complete_lab_panel,
    max_group_count=MAX_GROUPS,
    app_id=DISCORD_APP_ID,
    invite_link_func=generate_invite_link,
    bot_name=BOT_NAME,
    config_warnings=[LIVE_SETTINGS_WARNING] if LIVE_SETTINGS_WARNING else [],
)

bot.run(DISCORD_TOKEN)
