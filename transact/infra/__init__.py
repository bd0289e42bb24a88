"""transact.infra — configuration and logging."""
