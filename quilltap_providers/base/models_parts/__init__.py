"""Model parts package; import from ``quilltap_providers.base.models`` instead."""
