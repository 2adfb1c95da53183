"""
Streamlit UI for the detailing pricing calculator.

Features:
- Package / custom price, size, condition, job type and add-on selection
- Revenue split and employee hourly-rate check
- Price suggestion when a job pays below the hourly target
- Export of the breakdown to CSV
"""
import streamlit as st
import pandas as pd
from datetime import datetime

from detail_pricing.catalog import QuoteSelection, ServiceCatalog
from detail_pricing.config.settings import get_settings
from detail_pricing.engine import PricingEngine, hourly_rate_band
from detail_pricing.errors import CatalogError, ValidationError


st.set_page_config(
    page_title="Smart Pricing Calculator",
    layout="centered",
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return PricingEngine(get_settings().pricing)


@st.cache_resource
def get_catalog():
    """Get cached catalog instance."""
    return ServiceCatalog(get_settings())


try:
    engine = get_engine()
    catalog = get_catalog()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


BAND_COLORS = {"healthy": "green", "target": "orange", "below": "red"}
CUSTOM = "custom"


# ============================================================================
# CUSTOM CSS & STYLING
# ============================================================================
st.markdown("""
    <style>
        .block-container {
            padding-top: 2rem;
            padding-bottom: 2rem;
        }
        h1 {
            font-family: 'Helvetica Neue', Helvetica, Arial, sans-serif;
            font-weight: 700;
        }
        .stMetric {
            background-color: #f0f2f6;
            padding: 10px;
            border-radius: 5px;
            border-left: 5px solid #2563eb;
        }
    </style>
""", unsafe_allow_html=True)


st.title("🚘 Smart Pricing Calculator")
st.caption(f"v1.0 | Pricing Engine Active | {datetime.now().strftime('%Y-%m-%d')}")

packages = catalog.packages()
sizes = catalog.sizes()
conditions = catalog.conditions()
add_ons = catalog.add_ons()

# ============================================================================
# INPUTS
# ============================================================================
with st.container(border=True):
    c1, c2 = st.columns(2)
    with c1:
        vehicle = st.text_input("Vehicle Name", placeholder="Ex: Mercedes S560")
    with c2:
        package_labels = {row.code: f"{row.name} — ${row.price}" for row in packages.itertuples()}
        package_labels[CUSTOM] = "Custom Price"
        package = st.selectbox(
            "Package",
            options=list(package_labels),
            format_func=package_labels.get,
        )

    custom_amount = None
    if package == CUSTOM:
        custom_amount = st.number_input("Custom Price ($)", min_value=0.0, step=1.0, value=0.0)
        st.caption("Enter a base price for custom jobs that don't fit standard packages.")

    size_labels = {row.code: f"{row.label} (×{row.multiplier})" for row in sizes.itertuples()}
    condition_labels = {row.code: f"{row.label} (×{row.multiplier})" for row in conditions.itertuples()}

    c1, c2 = st.columns(2)
    with c1:
        size_codes = list(size_labels)
        size = st.selectbox(
            "Vehicle Size",
            options=size_codes,
            index=size_codes.index('sedan') if 'sedan' in size_codes else 0,
            format_func=size_labels.get,
        )
    with c2:
        condition_codes = list(condition_labels)
        condition = st.selectbox(
            "Condition",
            options=condition_codes,
            index=condition_codes.index('normal') if 'normal' in condition_codes else 0,
            format_func=condition_labels.get,
        )

    job_type = st.selectbox(
        "Job Type",
        options=["one_time", "maintenance"],
        format_func={"one_time": "Full Detail (One-Time)", "maintenance": "Maintenance Plan"}.get,
    )

    frequency = None
    if job_type == "maintenance":
        profiles = engine.constants.frequency_profiles
        frequency = st.selectbox(
            "Maintenance Frequency",
            options=list(profiles),
            index=list(profiles).index('monthly'),
            format_func=lambda f: f"{f.capitalize()} (×{profiles[f][0]})",
        )
        st.caption("Maintenance is faster and cheaper the more often it's done.")

    st.markdown("**Add-Ons**")
    selected_add_ons = []
    cols = st.columns(3)
    for i, row in enumerate(add_ons.itertuples()):
        with cols[i % 3]:
            if st.checkbox(f"{row.name} (${row.price})", key=f"addon_{row.code}"):
                selected_add_ons.append(row.code)

    c = engine.constants
    st.caption(
        f"**Assumptions:** Employee {c.employee_share * 100:.0f}%, "
        f"Supplies {c.supplies_share * 100:.0f}%, Company {c.company_share * 100:.0f}%."
    )
    calculate_clicked = st.button("Calculate", type="primary")


# ============================================================================
# OUTPUT
# ============================================================================
if calculate_clicked:
    selection = QuoteSelection(
        package=None if package == CUSTOM else package,
        custom_amount=custom_amount,
        size=size,
        condition=condition,
        job_type=job_type,
        frequency=frequency,
        add_ons=selected_add_ons,
        vehicle=vehicle,
    )
    try:
        result = engine.calculate(catalog.build_input(selection))
    except ValidationError as e:
        if package == CUSTOM:
            st.error("Please enter a valid custom price.")
        else:
            st.error(f"Invalid selection: {e.reason}")
        st.stop()
    except CatalogError as e:
        st.error(str(e))
        st.stop()

    vehicle_name = vehicle.strip() or "Unnamed Vehicle"
    band = hourly_rate_band(result.employee_hourly_rate, c)

    with st.container(border=True):
        st.subheader(vehicle_name)

        m1, m2, m3 = st.columns(3)
        m1.metric("Client Price", f"${result.client_price}")
        m2.metric("Estimated Time", f"{result.estimated_hours} hrs")
        m3.metric("Employee Hourly", f"${result.employee_hourly_rate}/hr")

        left, right = st.columns(2)
        with left:
            st.markdown(f"**Package:** ${result.base_price}")
            st.markdown(f"**Size:** ×{catalog.size_multiplier(size)}")
            st.markdown(f"**Condition:** ×{catalog.condition_multiplier(condition)}")
            if job_type == "maintenance":
                st.markdown(
                    f"**Frequency:** {frequency.capitalize()} "
                    f"(Price×{result.price_multiplier}, Time×{result.time_multiplier})"
                )
            else:
                st.markdown("**Job Type:** Full Detail")
            st.markdown(f"**Add-Ons:** ${result.add_ons_total}")
        with right:
            st.markdown(f"**Employee Pay ({c.employee_share * 100:.0f}%):** ${result.employee_pay}")
            st.markdown(f"**Supplies ({c.supplies_share * 100:.0f}%):** ${result.supplies_cost}")
            st.markdown(f"**Company Profit:** ${result.company_profit}")
            st.markdown(f"**Employee Hourly:** :{BAND_COLORS[band]}[**${result.employee_hourly_rate}/hr**]")

        if result.meets_hourly_target:
            st.success(f"✅ Healthy job — meets or exceeds ${c.minimum_employee_hourly_rate}/hr target.")
        else:
            st.warning(
                f"⚠️ Suggestion: raise client price to **${result.suggested_client_price}** to reach "
                f"~${c.minimum_employee_hourly_rate}/hr employee pay (at ~{result.estimated_hours} hrs)."
            )

        export_df = pd.DataFrame([{
            'Vehicle': vehicle_name,
            'Base Price': float(result.base_price),
            'Client Price': result.client_price,
            'Estimated Hours': float(result.estimated_hours),
            'Employee Pay': result.employee_pay,
            'Supplies': result.supplies_cost,
            'Company Profit': result.company_profit,
            'Employee Hourly': result.employee_hourly_rate,
            'Meets Target': result.meets_hourly_target,
            'Suggested Price': result.suggested_client_price,
        }])
        st.download_button(
            "📥 CSV",
            data=export_df.to_csv(index=False),
            file_name=f"quote_{vehicle_name.replace(' ', '_')}.csv",
            mime="text/csv",
            use_container_width=True
        )

    with st.expander("🔍 Calculation Details"):
        for t in result.trace:
            if t.value:
                st.caption(f"**{t.step}**: {t.description} = `{t.value}`")
            else:
                st.caption(f"**{t.step}**: {t.description}")
