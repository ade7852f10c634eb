"""Composable recorder layers: stacking, prefixing, filtering, fan-out and absolute-to-delta conversion."""