"""Order management: order lifecycle, discounting, and reporting."""
