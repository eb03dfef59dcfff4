from __future__ import annotations

from ordercore.domain.entities.endpoint import CheckoutProduct, EndpointId as E
from ordercore.domain.entities.region import CARTPANDA, LASTLINK

# Paths of the checkout pages provisioned on each provider. Prices are baked
# into each page, so every legal add-on combination has its own path.
CHECKOUT_PRODUCTS: dict[str, CheckoutProduct] = {
    "video-1-crianca": CheckoutProduct(
        product_id="video-1-crianca",
        recipient_count=1,
        endpoints={
            LASTLINK: {
                E.base: "p/C1B7E5A90",
                E.with_4k: "p/C1B7E5A91",
                E.with_fast_delivery: "p/C1B7E5A92",
                E.with_photo: "p/C1B7E5A93",
                E.with_4k_and_fast_delivery: "p/C1B7E5A94",
                E.with_4k_and_photo: "p/C1B7E5A95",
                E.with_fast_delivery_and_photo: "p/C1B7E5A96",
                E.with_all: "p/C1B7E5A97",
                E.with_combo: "p/C1B7E5A98",
            },
            CARTPANDA: {
                E.base: "checkout/santa-video-1",
                E.with_4k: "checkout/santa-video-1-4k",
                E.with_fast_delivery: "checkout/santa-video-1-fast",
                E.with_photo: "checkout/santa-video-1-photo",
                E.with_4k_and_fast_delivery: "checkout/santa-video-1-4k-fast",
                E.with_4k_and_photo: "checkout/santa-video-1-4k-photo",
                E.with_fast_delivery_and_photo: "checkout/santa-video-1-fast-photo",
                E.with_all: "checkout/santa-video-1-all",
                E.with_combo: "checkout/santa-video-1-bundle",
            },
        },
    ),
    "video-2-criancas": CheckoutProduct(
        product_id="video-2-criancas",
        recipient_count=2,
        endpoints={
            LASTLINK: {
                E.base: "p/C2D4F1C30",
                E.with_4k: "p/C2D4F1C31",
                E.with_fast_delivery: "p/C2D4F1C32",
                E.with_photo: "p/C2D4F1C33",
                E.with_4k_and_fast_delivery: "p/C2D4F1C34",
                E.with_4k_and_photo: "p/C2D4F1C35",
                E.with_fast_delivery_and_photo: "p/C2D4F1C36",
                E.with_all: "p/C2D4F1C37",
                E.with_combo: "p/C2D4F1C38",
            },
            CARTPANDA: {
                E.base: "checkout/santa-video-2",
                E.with_4k: "checkout/santa-video-2-4k",
                E.with_fast_delivery: "checkout/santa-video-2-fast",
                E.with_photo: "checkout/santa-video-2-photo",
                E.with_4k_and_fast_delivery: "checkout/santa-video-2-4k-fast",
                E.with_4k_and_photo: "checkout/santa-video-2-4k-photo",
                E.with_fast_delivery_and_photo: "checkout/santa-video-2-fast-photo",
                E.with_all: "checkout/santa-video-2-all",
                E.with_combo: "checkout/santa-video-2-bundle",
            },
        },
    ),
    "video-3-ou-mais-criancas": CheckoutProduct(
        product_id="video-3-ou-mais-criancas",
        recipient_count=3,
        endpoints={
            LASTLINK: {
                E.base: "p/C3A9B2E60",
                E.with_4k: "p/C3A9B2E61",
                E.with_fast_delivery: "p/C3A9B2E62",
                E.with_photo: "p/C3A9B2E63",
                E.with_4k_and_fast_delivery: "p/C3A9B2E64",
                E.with_4k_and_photo: "p/C3A9B2E65",
                E.with_fast_delivery_and_photo: "p/C3A9B2E66",
                E.with_all: "p/C3A9B2E67",
                E.with_combo: "p/C3A9B2E68",
            },
            CARTPANDA: {
                E.base: "checkout/santa-video-3",
                E.with_4k: "checkout/santa-video-3-4k",
                E.with_fast_delivery: "checkout/santa-video-3-fast",
                E.with_photo: "checkout/santa-video-3-photo",
                E.with_4k_and_fast_delivery: "checkout/santa-video-3-4k-fast",
                E.with_4k_and_photo: "checkout/santa-video-3-4k-photo",
                E.with_fast_delivery_and_photo: "checkout/santa-video-3-fast-photo",
                E.with_all: "checkout/santa-video-3-all",
                E.with_combo: "checkout/santa-video-3-bundle",
            },
        },
    ),
}
