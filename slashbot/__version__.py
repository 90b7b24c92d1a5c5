__version__ = "1.2.0"
__version_info__ = (1, 2, 0)
__release_date__ = "12.10.2026"

RELEASE_NOTES = """
🎉 New in 1.2.0
---------------
- 🧭 Subcommands: `/parent child` is routed to the child command's own guards and cooldown
- 🏷️ Group-scoped commands: commands with a `guild_id` are published only to that chat's menu
- 📈 Metrics: `slashbot_commands_total` split by outcome (completed/terminated/errored)

🎉 New in 1.1.0
---------------
- ⏱️ Cooldown scopes with fallbacks: per-user-per-group falls back to per-user-per-channel in private chats
- 🔒 Bot permission guard treats an unresolvable bot member as a missing permission instead of crashing

🎉 New in 1.0.0
---------------
- ✅ Guarded dispatch: owner, allow-list, role, permission, private chat and cooldown guards
- ✅ Listener notifications for terminated, completed and failed commands
"""
