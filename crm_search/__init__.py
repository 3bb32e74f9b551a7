"""crm-search: federated CRM search and tiered dashboard cache service."""
