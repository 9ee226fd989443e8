"""Labels the CLI puts on the objects it creates."""

APPLICATION_LABEL = "app.kubernetes.io/part-of"
COMPONENT_LABEL = "app.kubernetes.io/instance"
COMPONENT_TYPE_LABEL = "app.kubernetes.io/name"
