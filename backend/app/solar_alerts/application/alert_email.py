"""Rendering of Kp alert emails."""

from dataclasses import dataclass

from app.solar_alerts.domain.services.kp_scale import kp_to_description, kp_to_noaa_scale


@dataclass(frozen=True)
class AlertEmail:
    subject: str
    text: str
    html: str


def render_alert_email(kp_value: float, threshold: float, dashboard_url: str) -> AlertEmail:
    """Build the subject and bodies for a threshold-crossing alert.

    Both bodies carry the current Kp value and the subscriber's threshold.
    """
    scale = kp_to_noaa_scale(kp_value)
    description = kp_to_description(kp_value)

    subject = f"Aurora Alert: Kp Index reached {kp_value:g}!"
    text = f"""
Solar Activity Alert

The current Kp index has reached {kp_value:g} ({description}).
This meets or exceeds your alert threshold of Kp {threshold:g}.

Go outside or check the dashboard for aurora viewing opportunities:
{dashboard_url}

You received this because you enabled email alerts on Solar Dash.
    """.strip()
    html = f"""
    <div style="font-family: sans-serif; max-width: 600px; margin: auto;">
      <h1 style="color: #ff9800;">Solar Activity Alert</h1>
      <p>The current <b>Kp index has reached {kp_value:g}</b> ({scale}: {description}).</p>
      <p>This meets or exceeds your alert threshold of <b>Kp {threshold:g}</b>.</p>
      <p>Go outside or check the dashboard for aurora viewing opportunities!</p>
      <a href="{dashboard_url}" style="display: inline-block; padding: 10px 20px; background: #2196f3; color: white; text-decoration: none; border-radius: 5px;">View Live Dashboard</a>
      <hr style="margin-top: 20px; border: 0; border-top: 1px solid #eee;">
      <p style="font-size: 0.8em; color: #777;">You received this because you enabled email alerts on Solar Dash.</p>
    </div>
    """
    return AlertEmail(subject=subject, text=text, html=html)
