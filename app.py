from placement_portal.web.framework.page import guard_page
from placement_portal.web.pages_impl.landing import render

# MUST run before any other Streamlit command on this page
portal = guard_page("/", icon="🎓")

render(portal)
