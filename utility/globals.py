# ──────────────────────────
# Runtime services, created once the bot is ready
# ──────────────────────────
board_publisher = None       # utility.board.BoardPublisher
availability_monitor = None  # utility.availability.AvailabilityMonitor
