"""Catalog forms."""

from django import forms

from .models import Category, Product


class CategoryForm(forms.ModelForm):
    class Meta:
        model = Category
        fields = ("name", "display_order")

    def clean_name(self):
        name = self.cleaned_data["name"]
        if name.strip().lower() == "test":
            raise forms.ValidationError("Test is an invalid value.")
        return name

    def clean(self):
        cleaned_data = super().clean()
        name = cleaned_data.get("name")
        display_order = cleaned_data.get("display_order")
        if name and display_order is not None and name == str(display_order):
            self.add_error("name", "The display order cannot exactly match the name.")
        return cleaned_data


class ProductForm(forms.ModelForm):
    """Product fields plus the full image URL list, one URL per line."""

    image_urls = forms.CharField(
        label="Image URLs",
        required=False,
        widget=forms.Textarea(attrs={"rows": 3}),
        help_text="One image URL per line. Saving replaces all existing images.",
    )

    class Meta:
        model = Product
        fields = (
            "title",
            "description",
            "isbn",
            "author",
            "list_price",
            "price",
            "price50",
            "price100",
            "category",
        )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk and not self.is_bound:
            self.initial["image_urls"] = "\n".join(self.instance.image_urls)

    def clean_image_urls(self):
        raw = self.cleaned_data.get("image_urls") or ""
        return [line.strip() for line in raw.splitlines() if line.strip()]
