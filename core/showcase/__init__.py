"""Community project showcase: submission review and moderation."""
