"""Testing – fakes for exercising Cron and its alert channels without I/O."""
