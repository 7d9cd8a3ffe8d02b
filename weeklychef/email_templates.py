"""
MJML Email Templates
Booking, quote and recruitment notifications for customers, candidates and the organizer
"""

from html import escape
from typing import Optional

THEME = {
    "primary": "#d97706",
    "header_bg": "#111827",
    "background": "#f9f9f9",
    "text_primary": "#111827",
    "text_secondary": "#333333",
    "text_muted": "#6b7280",
    "border": "#e2e8f0",
    "details_bg": "#f8fafc",
}

SITE_URL = "https://weeklyprivatechef.com"


def get_base_template(title: str, preview_text: str, content_sections: str) -> str:
    """Base MJML template wrapper for all emails"""
    return f"""
    <mjml>
      <mj-head>
        <mj-title>{escape(title)}</mj-title>
        <mj-preview>{escape(preview_text)}</mj-preview>
        <mj-attributes>
          <mj-all font-family="'Helvetica Neue', Helvetica, Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="{THEME['header_bg']}" padding="30px 20px">
          <mj-column>
            <mj-text align="center" color="#ffffff" font-size="24px" font-weight="300" letter-spacing="1px">
              PRIVATE CHEF
            </mj-text>
          </mj-column>
        </mj-section>

        <mj-section background-color="#ffffff" padding="40px 30px">
          <mj-column>
            <mj-text font-size="22px" font-weight="600" color="{THEME['text_primary']}" padding="0 0 16px 0">
              {escape(title)}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        <mj-section padding="20px">
          <mj-column>
            <mj-text align="center" font-size="12px" color="{THEME['text_muted']}">
              <a href="{SITE_URL}" style="color: {THEME['text_muted']};">weeklyprivatechef.com</a><br/>
              This is an automated message.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def _details_box(rows: list[tuple[str, Optional[str]]]) -> str:
    lines = "<br/>".join(
        f"<strong>{escape(label)}:</strong> {escape(str(value)) if value not in (None, '') else 'N/A'}"
        for label, value in rows
    )
    return f"""
    <mj-text container-background-color="{THEME['details_bg']}" padding="20px" font-size="15px">
      {lines}
    </mj-text>
    """


def booking_confirmed_customer_template(
    customer_name: str,
    booking_ref: str,
    plan_name: str,
    city: str,
    start_date: str,
    end_date: str,
    num_guests: int,
    total_paid: str,
) -> str:
    """Booking confirmation for the customer"""
    details = _details_box(
        [
            ("Booking Ref", f"#{booking_ref[:8]}"),
            ("Plan", plan_name),
            ("Location", city),
            ("Service Dates", f"{start_date} to {end_date}"),
            ("Guests", str(num_guests)),
            ("Total Paid", total_paid),
        ]
    )
    content = f"""
    <mj-text>
      Dear {escape(customer_name)},
    </mj-text>

    <mj-text>
      We are delighted to confirm your Weekly Private Chef booking. Your payment has been successfully processed.
    </mj-text>

    {details}

    <mj-text>
      <strong>Next Steps:</strong> Our concierge team will contact you within 24–48 hours to discuss menu preferences and dietary requirements.
    </mj-text>
    """

    return get_base_template(
        title="Booking Confirmed",
        preview_text=f"Your private chef in {city} is confirmed",
        content_sections=content,
    )


def booking_confirmed_organizer_template(
    customer_name: str,
    customer_email: str,
    customer_phone: Optional[str],
    booking_id: str,
    plan_name: str,
    city: str,
    start_date: str,
    end_date: str,
    num_guests: int,
    amount: str,
    dietary_preferences: Optional[str] = None,
) -> str:
    """New paid booking notification for the organizer"""
    details = _details_box(
        [
            ("Booking ID", booking_id),
            ("Customer", customer_name),
            ("Email", customer_email),
            ("Phone", customer_phone),
            ("Plan", plan_name),
            ("Amount", amount),
            ("Location", city),
            ("Service Dates", f"{start_date} to {end_date}"),
            ("Guests", str(num_guests)),
            ("Dietary Preferences", dietary_preferences),
        ]
    )
    content = f"""
    <mj-text>
      A new payment has been received via Stripe.
    </mj-text>

    {details}
    """

    return get_base_template(
        title="New Booking Confirmed",
        preview_text=f"{customer_name} - {amount}",
        content_sections=content,
    )


def quote_received_customer_template(
    customer_name: str, city: str, start_date: str, num_guests: int
) -> str:
    """Acknowledgement for a custom quote request"""
    content = f"""
    <mj-text>
      Dear {escape(customer_name)},
    </mj-text>

    <mj-text>
      Thank you for your interest in our private chef service. We have received your request for
      <strong>{num_guests} guests</strong> in <strong>{escape(city)}</strong> starting {escape(start_date)}.
    </mj-text>

    <mj-text>
      A member of our team will review your requirements and get back to you within 24 hours with a tailored proposal.
    </mj-text>
    """

    return get_base_template(
        title="Quote Request Received",
        preview_text="We received your private chef quote request",
        content_sections=content,
    )


def quote_received_organizer_template(
    customer_name: str,
    customer_email: str,
    customer_phone: Optional[str],
    city: str,
    start_date: str,
    num_guests: int,
    weekend: str,
    notes: Optional[str],
) -> str:
    """New custom quote request for the organizer"""
    details = _details_box(
        [
            ("Customer", customer_name),
            ("Email", customer_email),
            ("Phone", customer_phone),
            ("Location", city),
            ("Start Date", start_date),
            ("Guests", str(num_guests)),
            ("Weekend", weekend),
            ("Notes", notes),
        ]
    )
    content = f"""
    <mj-text>
      A new custom quote request has been submitted.
    </mj-text>

    {details}
    """

    return get_base_template(
        title="New Quote Request",
        preview_text=f"{customer_name} - {city}",
        content_sections=content,
    )


def recruitment_candidate_template(first_name: str, role: str, city: Optional[str]) -> str:
    content = f"""
    <mj-text>
      Thank you for your application, {escape(first_name)}!
    </mj-text>

    <mj-text>
      We have received your application for the <strong>{escape(role)}</strong> position in {escape(city or "your area")}.
    </mj-text>

    <mj-text>
      Our team will review your profile and contact you soon if there is an opportunity that matches your skills.
    </mj-text>
    """

    return get_base_template(
        title="Application Received",
        preview_text=f"Thanks for applying as {role}",
        content_sections=content,
    )


def recruitment_organizer_template(
    full_name: str,
    email: str,
    phone: Optional[str],
    role: str,
    city: Optional[str],
) -> str:
    """New staff application, pointing the organizer at the admin panel for CV and photos"""
    details = _details_box(
        [
            ("Name", full_name),
            ("Role", role),
            ("City", city),
            ("Email", email),
            ("Phone", phone),
        ]
    )
    content = f"""
    <mj-text>
      A new staff application has been submitted. Open the control panel to view the CV and photos.
    </mj-text>

    {details}

    <mj-button
      href="{SITE_URL}/admin/control-panel"
      background-color="{THEME['header_bg']}"
      color="#ffffff"
      font-weight="600"
      border-radius="5px"
    >
      Open Admin Panel
    </mj-button>
    """

    return get_base_template(
        title="New Application",
        preview_text=f"{full_name} - {role}",
        content_sections=content,
    )
