from bedgate.routing.resolver import apply_routing_prefix, is_nova_family, resolve_model, should_use_this_adapter

__all__ = ["apply_routing_prefix", "is_nova_family", "resolve_model", "should_use_this_adapter"]
