def emitted_types(services):
    """Event types passed to services.events.emit, in call order"""
    return [c.args[0] for c in services.events.emit.call_args_list]
