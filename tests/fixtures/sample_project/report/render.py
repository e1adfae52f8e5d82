import datetime
from jinja2 import Template
# import matplotlib

TEMPLATE = Template("{{ city }} on {{ day }}: {{ summary }}")


def render_forecast(city, payload):
    day = datetime.date.today().isoformat()
    return TEMPLATE.render(city=city, day=day, summary=payload.get("summary", "n/a"))


def dump_yaml(payload):
    import yaml
    return yaml.safe_dump(payload)
