"""Business logic: authentication, authorization policy, record and user stores, seeding."""
